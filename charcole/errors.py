"""Exceptions raised while scaffolding a project."""


class CharcoleError(Exception):
    """Base class for every fatal scaffolding error."""


class InvalidProjectNameError(CharcoleError, ValueError):
    pass


class ProjectExistsError(CharcoleError):
    def __init__(self, target_dir):
        self.target_dir = target_dir
        super().__init__(f'Folder "{target_dir.name}" already exists.')


class TemplateNotFoundError(CharcoleError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Template file not found: {path}")


class ManifestError(CharcoleError):
    """A package manifest (base or module fragment) could not be read."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse {path}: {reason}")
