from .manifest import merge_package_json
from .options import OPTIONAL_MODULES, ProjectOptions, validate_project_name
from .project import ProjectResult, create_project
