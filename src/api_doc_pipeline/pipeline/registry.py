"""Name-addressed cache of finalized documents."""

import logging
import threading

from api_doc_pipeline.config import Configuration
from api_doc_pipeline.document.base import Document
from api_doc_pipeline.pipeline.assembler import DocumentAssembler
from api_doc_pipeline.pipeline.feature import DocumentationFeature
from api_doc_pipeline.routing.manifest import Manifest

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """Builds each document at most once per name, on first request.

    Requests for the same name wait for a single build; different names build
    independently. Only finalized documents are cached, so a failed build is
    retried on the next request.
    """

    def __init__(self, assembler: DocumentAssembler):
        self.assembler = assembler
        self._documents: dict[str, Document] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    @property
    def names(self) -> list[str]:
        return self.assembler.versions.names

    def get(self, name: str) -> Document | None:
        document = self._documents.get(name)
        if document is not None:
            return document
        if self.assembler.versions.find(name) is None:
            logger.info("No API version matches document '%s'", name)
            return None

        with self._lock_for(name):
            document = self._documents.get(name)
            if document is not None:
                return document
            document = self.assembler.assemble(name)
            if document is not None:
                self._documents[name] = document
                logger.info("Built API document '%s'", name)
            return document

    def documents(self) -> dict[str, Document]:
        """Build (or fetch) the document for every known version name."""
        result = {}
        for name in self.names:
            document = self.get(name)
            if document is not None:
                result[name] = document
        return result

    def invalidate(self, name: str | None = None) -> None:
        with self._guard:
            if name is None:
                self._documents.clear()
            else:
                self._documents.pop(name, None)

    def _lock_for(self, name: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(name, threading.Lock())


def build_registry(configuration: Configuration, manifest: Manifest) -> DocumentRegistry | None:
    """Return a registry, or None when documentation is disabled by configuration."""
    if DocumentationFeature.resolve(configuration) is DocumentationFeature.DISABLED:
        logger.info("No OpenApi configuration section; API documentation disabled")
        return None
    assembler = DocumentAssembler(configuration, manifest.versions, manifest.routes)
    return DocumentRegistry(assembler)
