"""Document assembly for one API version.

Assembly runs a fixed chain of steps. Document steps map a Document to a new
Document; operation steps map each Operation to a new Operation. Every step is
a pure function of its input and the AssemblyContext, so assembling the same
name twice against the same inputs gives equal documents.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial

from api_doc_pipeline.config import Configuration, join_path
from api_doc_pipeline.document.base import Document, Info, Operation, SecurityScheme
from api_doc_pipeline.pipeline.feature import OPENAPI_SECTION
from api_doc_pipeline.routing.base import VersionDescriptor
from api_doc_pipeline.routing.table import RouteTable
from api_doc_pipeline.routing.versions import VersionDescriptorProvider
from api_doc_pipeline.transforms.authorization import annotate_authorization
from api_doc_pipeline.transforms.describe import describe_version
from api_doc_pipeline.transforms.operations import apply_api_version_parameter, apply_deprecated_status
from api_doc_pipeline.transforms.schemas import apply_schema_nullability
from api_doc_pipeline.transforms.security import (
    IDENTITY_SECTION,
    register_security_scheme,
    synthesize_security_scheme,
)

logger = logging.getLogger(__name__)

DOCUMENT_SECTION = join_path(OPENAPI_SECTION, "Document")


class AssemblyState(Enum):
    NOT_STARTED = "NotStarted"
    VERSION_RESOLVED = "VersionResolved"
    DESCRIPTION_COMPOSED = "DescriptionComposed"
    COMPONENTS_INJECTED = "ComponentsInjected"
    OPERATIONS_ANNOTATED = "OperationsAnnotated"
    FINALIZED = "Finalized"


@dataclass(frozen=True)
class AssemblyContext:
    """Inputs resolved once per document before any step runs."""

    descriptor: VersionDescriptor
    title: str
    description: str
    security_scheme: SecurityScheme | None
    requires_authorization: Callable[[Operation], bool]


DocumentStep = Callable[[Document, AssemblyContext], Document]
OperationStep = Callable[[Operation, AssemblyContext], Operation]


def apply_info(document: Document, context: AssemblyContext) -> Document:
    info = Info(
        title=context.title,
        version=str(context.descriptor.version),
        description=context.description,
    )
    return document.model_copy(update={"info": info})


def apply_security_scheme(document: Document, context: AssemblyContext) -> Document:
    return register_security_scheme(document, context.security_scheme)


def clear_servers(document: Document, context: AssemblyContext) -> Document:
    # Server addresses depend on the deployment and are filled in downstream.
    return document.model_copy(update={"servers": []})


def apply_schemas(document: Document, context: AssemblyContext) -> Document:
    components = document.components.model_copy(
        update={"schemas": apply_schema_nullability(document.components.schemas)}
    )
    return document.model_copy(update={"components": components})


def apply_authorization(operation: Operation, context: AssemblyContext) -> Operation:
    return annotate_authorization(
        operation, context.requires_authorization(operation), context.security_scheme
    )


def apply_deprecation(operation: Operation, context: AssemblyContext) -> Operation:
    return apply_deprecated_status(operation, context.descriptor)


def apply_api_version(operation: Operation, context: AssemblyContext) -> Operation:
    return apply_api_version_parameter(operation, context.descriptor)


DESCRIPTION_STEPS: tuple[tuple[str, DocumentStep], ...] = (
    ("info", apply_info),
)

COMPONENT_STEPS: tuple[tuple[str, DocumentStep], ...] = (
    ("security-scheme", apply_security_scheme),
    ("servers", clear_servers),
    ("schema-nullability", apply_schemas),
)

OPERATION_STEPS: tuple[tuple[str, OperationStep], ...] = (
    ("authorization", apply_authorization),
    ("deprecation", apply_deprecation),
    ("api-version", apply_api_version),
)


class DocumentAssembler:
    """Builds the document for a version name from configuration and routing metadata."""

    def __init__(
        self,
        configuration: Configuration,
        versions: VersionDescriptorProvider,
        routes: RouteTable,
    ):
        self.configuration = configuration
        self.versions = versions
        self.routes = routes

    def assemble(self, name: str) -> Document | None:
        """Return the finalized document for ``name``, or None if no version matches.

        ConfigurationMissing propagates; no partially built document escapes.
        """
        state = AssemblyState.NOT_STARTED
        descriptor = self.versions.find(name)
        if descriptor is None:
            logger.info("No API version matches document '%s'; skipping", name)
            return None
        state = self._advance(name, state, AssemblyState.VERSION_RESOLVED)

        context = self._resolve_context(descriptor)
        document = self.routes.base_document(descriptor)

        document = self._run_document_steps(document, context, DESCRIPTION_STEPS)
        state = self._advance(name, state, AssemblyState.DESCRIPTION_COMPOSED)

        document = self._run_document_steps(document, context, COMPONENT_STEPS)
        state = self._advance(name, state, AssemblyState.COMPONENTS_INJECTED)

        operations = [self._annotate(op, context) for op in document.operations]
        document = document.model_copy(update={"operations": operations})
        state = self._advance(name, state, AssemblyState.OPERATIONS_ANNOTATED)

        self._advance(name, state, AssemblyState.FINALIZED)
        return document

    def _resolve_context(self, descriptor: VersionDescriptor) -> AssemblyContext:
        title = self.configuration.required_value(DOCUMENT_SECTION, "Title")
        base_description = self.configuration.required_value(DOCUMENT_SECTION, "Description")
        scheme = synthesize_security_scheme(self.configuration.section(IDENTITY_SECTION))
        return AssemblyContext(
            descriptor=descriptor,
            title=title,
            description=describe_version(base_description, descriptor),
            security_scheme=scheme,
            requires_authorization=partial(self.routes.requires_authorization, version=descriptor.version),
        )

    def _run_document_steps(
        self,
        document: Document,
        context: AssemblyContext,
        steps: tuple[tuple[str, DocumentStep], ...],
    ) -> Document:
        for step_name, step in steps:
            logger.debug("Document '%s': running %s", document.name, step_name)
            document = step(document, context)
        return document

    def _annotate(self, operation: Operation, context: AssemblyContext) -> Operation:
        for _step_name, step in OPERATION_STEPS:
            operation = step(operation, context)
        return operation

    def _advance(self, name: str, current: AssemblyState, target: AssemblyState) -> AssemblyState:
        logger.debug("Document '%s': %s -> %s", name, current.value, target.value)
        return target
