"""Version-derived operation transformers."""

from api_doc_pipeline.document.base import Operation
from api_doc_pipeline.routing.base import VersionDescriptor
from api_doc_pipeline.values import to_primitive

API_VERSION_PARAMETER = "api-version"
API_VERSION_DESCRIPTION = "The API version, in the format 'major.minor'."


def apply_deprecated_status(operation: Operation, descriptor: VersionDescriptor) -> Operation:
    deprecated = operation.deprecated or descriptor.deprecated
    if deprecated == operation.deprecated:
        return operation
    return operation.model_copy(update={"deprecated": deprecated})


def apply_api_version_parameter(operation: Operation, descriptor: VersionDescriptor) -> Operation:
    """Describe the ``api-version`` parameter and give it this version as example."""
    if not any(p.name == API_VERSION_PARAMETER for p in operation.parameters):
        return operation

    example = to_primitive(str(descriptor.version))
    parameters = [
        p.model_copy(update={"description": API_VERSION_DESCRIPTION, "example": example})
        if p.name == API_VERSION_PARAMETER
        else p
        for p in operation.parameters
    ]
    return operation.model_copy(update={"parameters": parameters})
