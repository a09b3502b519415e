from __future__ import annotations


class SquashRepoError(RuntimeError):
    """Root of all squashrepo errors."""


class ConfigError(SquashRepoError):
    pass


class CatalogError(SquashRepoError):
    pass


class PipelineError(SquashRepoError):
    """A stage failure.

    ``aborts`` decides whether forward progress stops (cleanup still runs).
    """

    aborts: bool = True


class FetchFailure(PipelineError):
    aborts = True


class MountFailure(PipelineError):
    aborts = True


class NoArtifactsFound(PipelineError):
    aborts = False


class UnmountFailure(PipelineError):
    aborts = False
