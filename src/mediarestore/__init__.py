"""mediarestore: reconcile saved project media references with the filesystem."""

__version__ = "0.1.0"
