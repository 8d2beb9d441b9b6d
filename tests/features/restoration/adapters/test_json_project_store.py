"""Tests for the JSON project-file adapter."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mediarestore.features.restoration import (
    MediaStatus,
    MusicMetadata,
    ProjectFileError,
    SavedMediaReference,
    SavedMusicReference,
)
from mediarestore.features.restoration.adapters.project.json_project import JsonProjectStore
from mediarestore.features.restoration.usecases.ports import ProjectMedia

MEDIA_ENTRY = {
    "id": "abc",
    "originalPath": "/work/footage/a.mp4",
    "relativePath": "footage/a.mp4",
    "name": "a.mp4",
    "size": 2048,
    "lastModified": 1_700_000_000_000,
    "isVideo": True,
    "isAudio": False,
    "isImage": False,
    "metadata": {"duration": 3.5},
    "status": "available",
    "lastChecked": 5,
}

MUSIC_ENTRY = {
    "id": "song",
    "originalPath": "/work/music/song.mp3",
    "name": "song.mp3",
    "size": 99,
    "isAudio": True,
    "musicMetadata": {"artist": "Band", "title": "Song", "year": 2020, "track": 3},
}


def _write(path: Path, document: object) -> Path:
    _ = path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_load_top_level_arrays(tmp_path: Path) -> None:
    project_file = _write(
        tmp_path / "project.json", {"mediaFiles": [MEDIA_ENTRY], "musicFiles": [MUSIC_ENTRY]}
    )

    project = JsonProjectStore().load(project_file)

    assert len(project.media) == 1
    media = project.media[0]
    assert media.original_path == Path("/work/footage/a.mp4")
    assert media.relative_path == "footage/a.mp4"
    assert media.status is MediaStatus.AVAILABLE
    assert media.metadata == {"duration": 3.5}
    music = project.music[0]
    assert isinstance(music, SavedMusicReference)
    assert music.music_metadata == MusicMetadata(artist="Band", title="Song", year=2020, track=3)


def test_load_nested_media_library(tmp_path: Path) -> None:
    project_file = _write(
        tmp_path / "project.json", {"timeline": [], "mediaLibrary": {"mediaFiles": [MEDIA_ENTRY]}}
    )

    project = JsonProjectStore().load(project_file)

    assert [ref.id for ref in project.media] == ["abc"]
    assert project.music == []


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        json.dumps({"mediaFiles": {"id": "x"}}),
        json.dumps({"mediaFiles": [{"id": "no-path"}]}),
    ],
)
def test_load_rejects_malformed_projects(tmp_path: Path, content: str) -> None:
    project_file = tmp_path / "project.json"
    _ = project_file.write_text(content, encoding="utf-8")

    with pytest.raises(ProjectFileError):
        _ = JsonProjectStore().load(project_file)


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ProjectFileError):
        _ = JsonProjectStore().load(tmp_path / "missing.json")


def test_save_preserves_unrelated_keys(tmp_path: Path) -> None:
    project_file = _write(
        tmp_path / "project.json",
        {"timeline": [1, 2], "mediaLibrary": {"mediaFiles": [], "folders": ["x"]}},
    )
    reference = SavedMediaReference(
        id="new",
        original_path=Path("/work/b.mov"),
        name="b.mov",
        size=7,
        is_video=True,
    )

    JsonProjectStore().save(project_file, ProjectMedia(media=[reference]))

    document = json.loads(project_file.read_text(encoding="utf-8"))
    assert document["timeline"] == [1, 2]
    assert document["mediaLibrary"]["folders"] == ["x"]
    assert document["mediaLibrary"]["mediaFiles"][0]["originalPath"] == "/work/b.mov"
    assert document["mediaLibrary"]["musicFiles"] == []


def test_save_then_load_keeps_references(tmp_path: Path) -> None:
    project_file = tmp_path / "new" / "project.json"
    music = SavedMusicReference.from_dict(MUSIC_ENTRY)
    media = SavedMediaReference.from_dict(MEDIA_ENTRY)
    store = JsonProjectStore()

    store.save(project_file, ProjectMedia(media=[media], music=[music]))
    loaded = store.load(project_file)

    assert loaded.media == [media]
    assert loaded.music == [music]
