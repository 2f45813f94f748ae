"""Document loading for Folio.

This module discovers document files in a source directory, splits each into
front matter and body, renders the body to HTML and creates immutable
Document records.

Key classes:
- Document: Frozen dataclass representing one source document.
- FileDocumentSource: Implementation of the DocumentSource protocol.
- UrlDeriver: Derives the public URL of a document.
- DocumentBuilder: Builds a Document from one source file.
- DocumentLoader: Facade that loads a whole directory, skipping bad files.
- LoadResult: Documents plus the per-file problems that were skipped.

The loader returns an unordered ``frozenset``; ordering is the Index
Builder's job.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .errors import DirectoryUnreadableError, MalformedDocumentError
from .extractors import (
    CompositeMetadataExtractor,
    default_metadata_extractor,
    extract_frontmatter,
)
from .protocols import DocumentSource
from .renderers import RendererRegistry, default_renderer_registry
from .utils import document_id, is_internal_path, slugify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """A source document with its metadata.

    Attributes:
        id: Source path relative to the source directory, without extension.
        title: Title from the front matter.
        url: URL path, derived once from the id.
        body: Raw body text after the front matter.
        content: Body rendered to HTML.
        published_at: Publication date, or None when the document has none.
        excerpt_override: Explicit excerpt from the front matter.
        layout: Front matter layout name (carried, not interpreted).
        draft: Whether the source file is a draft.
        path: Source file path.
        frontmatter: Read-only view of the full front matter.
    """

    id: str
    title: str
    url: str
    body: str = ""
    content: str = ""
    published_at: date | None = None
    excerpt_override: str | None = None
    layout: str = ""
    draft: bool = False
    path: Path | None = field(default=None, compare=False)
    frontmatter: Mapping[str, Any] = field(
        default_factory=dict, compare=False, hash=False
    )


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a source directory.

    Attributes:
        documents: Successfully loaded documents.
        skipped: Errors for the files that were skipped.
    """

    documents: frozenset[Document]
    skipped: tuple[MalformedDocumentError, ...] = ()


class FileDocumentSource:
    """Finds document files in a directory.

    Directories whose name starts with ``_`` are internal and never
    searched; files whose name starts with ``_`` are drafts.

    Attributes:
        source_dir: Directory containing the documents.
        renderer_registry: Decides which files are documents.
    """

    def __init__(
        self, source_dir: Path, renderer_registry: RendererRegistry | None = None
    ):
        self.source_dir = source_dir
        self.renderer_registry = renderer_registry or default_renderer_registry

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """List all document files.

        Args:
            include_drafts: Whether to include draft files.

        Returns:
            List of paths to document files, sorted for reproducible logs.

        Raises:
            DirectoryUnreadableError: If the source directory cannot be read.
        """
        try:
            if not self.source_dir.is_dir():
                raise DirectoryUnreadableError(self.source_dir)
            # rglob skips unreadable directories silently; iterdir does not
            next(iter(self.source_dir.iterdir()), None)
            candidates = sorted(self.source_dir.rglob("*"))
        except OSError as exc:
            raise DirectoryUnreadableError(self.source_dir, exc) from exc

        files: list[Path] = []
        for path in candidates:
            if path.is_dir():
                continue
            rel = path.relative_to(self.source_dir)
            if is_internal_path(rel.parent):
                continue
            if rel.name.startswith("_") and not include_drafts:
                continue
            if self.renderer_registry.accepts(path):
                files.append(path)
        return files


class UrlDeriver:
    """Derives URLs for documents from their location in the source tree."""

    def derive(self, rel: Path) -> str:
        """Derive the URL for a document.

        The directory segments are kept and the file stem is slugified,
        dropping any date prefix: ``posts/2024-08-27-Hello.md`` maps to
        ``/posts/hello/``. Index files map to their directory.

        Args:
            rel: Path relative to the source directory.

        Returns:
            URL path for the document.
        """
        slug = slugify(rel.stem.lstrip("_"))
        segments = [p for p in rel.parent.parts if p]
        url_parts = segments if slug == "index" else segments + [slug]
        path = "/".join(url_parts)
        return f"/{path}/" if path else "/"


class DocumentBuilder:
    """Builds Document objects from source files.

    Attributes:
        source_dir: Directory containing the documents.
        renderer_registry: Registry of body renderers.
        metadata_extractor: Composite metadata extractor.
        url_deriver: URL deriver instance.
    """

    def __init__(
        self,
        source_dir: Path,
        renderer_registry: RendererRegistry | None = None,
        metadata_extractor: CompositeMetadataExtractor | None = None,
        url_deriver: UrlDeriver | None = None,
    ):
        self.source_dir = source_dir
        self.renderer_registry = renderer_registry or default_renderer_registry
        self.metadata_extractor = metadata_extractor or default_metadata_extractor
        self.url_deriver = url_deriver or UrlDeriver()

    def build(self, path: Path) -> Document:
        """Build a Document from a source file.

        Args:
            path: Path to the source file.

        Returns:
            Document object.

        Raises:
            MalformedDocumentError: If the file cannot be read, its front
                matter is unusable, or it has no title.
        """
        rel = path.relative_to(self.source_dir)
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MalformedDocumentError(path, f"Cannot read file: {exc}", exc) from exc

        try:
            frontmatter, body = extract_frontmatter(raw)
        except MalformedDocumentError as exc:
            raise MalformedDocumentError(path, exc.message, exc.original_error) from exc

        metadata = self.metadata_extractor.extract(frontmatter, path)
        title = metadata.get("title")
        if not title:
            raise MalformedDocumentError(path, "Front matter is missing a title")

        renderer = self.renderer_registry.get_renderer(path)
        content = renderer.render(body) if renderer else body

        return Document(
            id=document_id(rel),
            title=title,
            url=self.url_deriver.derive(rel),
            body=body,
            content=content,
            published_at=metadata.get("published_at"),
            excerpt_override=metadata.get("excerpt_override"),
            layout=metadata.get("layout", ""),
            draft=path.name.startswith("_"),
            path=path,
            frontmatter=MappingProxyType(dict(frontmatter)),
        )


class DocumentLoader:
    """Facade for loading every document in a source directory.

    Per-file problems are isolated: the offending document is skipped, a
    warning is logged and the error is reported in the LoadResult. Only an
    unreadable source directory stops the load.

    Attributes:
        source_dir: Directory containing the documents.
    """

    def __init__(
        self,
        source_dir: Path,
        source: DocumentSource | None = None,
        builder: DocumentBuilder | None = None,
    ):
        self.source_dir = source_dir
        self._source = source or FileDocumentSource(source_dir)
        self._builder = builder or DocumentBuilder(source_dir)

    def load(self, include_drafts: bool = False) -> LoadResult:
        """Load all documents.

        Args:
            include_drafts: Whether to include draft documents.

        Returns:
            LoadResult with the loaded documents and the skipped errors.

        Raises:
            DirectoryUnreadableError: If the source directory cannot be read.
        """
        documents: dict[str, Document] = {}
        skipped: list[MalformedDocumentError] = []
        urls: dict[str, str] = {}
        for path in self._source.iter_files(include_drafts):
            try:
                document = self._builder.build(path)
                if document.id in documents:
                    other = documents[document.id].path
                    raise MalformedDocumentError(
                        path, f"Duplicate document id {document.id!r} (also {other})"
                    )
            except MalformedDocumentError as exc:
                logger.warning("Skipping document %s", exc)
                skipped.append(exc)
                continue
            if document.url in urls:
                logger.warning(
                    "%s and %s share the URL %s",
                    urls[document.url],
                    document.id,
                    document.url,
                )
            else:
                urls[document.url] = document.id
            logger.debug("Loaded %s -> %s", document.id, document.url)
            documents[document.id] = document
        logger.debug(
            "Loaded %d documents from %s (%d skipped)",
            len(documents),
            self.source_dir,
            len(skipped),
        )
        return LoadResult(
            documents=frozenset(documents.values()), skipped=tuple(skipped)
        )


def load_documents(
    source_dir: Path, include_drafts: bool = False
) -> frozenset[Document]:
    """Load the documents in ``source_dir`` as an unordered set.

    Args:
        source_dir: Directory containing the documents.
        include_drafts: Whether to include draft documents.

    Returns:
        Frozen set of Document objects.

    Raises:
        DirectoryUnreadableError: If the source directory cannot be read.
    """
    return DocumentLoader(Path(source_dir)).load(include_drafts).documents
