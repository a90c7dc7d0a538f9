"""
Field substitution: fills a document's merge fields from a value resolver.
"""

from typing import Dict, List

from ..core.errors import FieldNotFound, MergeError, MergeResult
from ..utils.logging_config import get_merge_logger
from .field_locator import FieldLocator
from .package import DocxPackage
from .resolvers import ValueResolver
from .run_text_matcher import RunTextMatcher


class SubstitutionEngine:
    """Replaces every merge field placeholder with the value the resolver supplies."""

    def __init__(self, resolver: ValueResolver):
        self.resolver = resolver
        self.locator = FieldLocator()
        self.matcher = RunTextMatcher()
        self.logger = get_merge_logger()
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {'fields': 0, 'replaced': 0, 'unmatched': 0}

    def merge_package(self, package: DocxPackage) -> Dict[str, int]:
        """
        Substitute all fields of an open package in place.

        Fields are processed in document order. Each field name is resolved
        and every display placeholder for it anywhere in the body is
        overwritten. Field code nodes stay in the tree.

        Args:
            package: Package owned by this merge

        Returns:
            Dict with counts of fields seen, placeholders replaced and fields
            without a visible placeholder

        Raises:
            MalformedField: A field code lacks the MERGEFIELD delimiter
            FieldNotFound: The resolver rejected a field name
            PackagingFailure: A value cannot be written as XML text
        """
        self.stats = self._empty_stats()
        body = package.body
        replaced_by_name: Dict[str, int] = {}

        for marker in self.locator.locate(body):
            field_name = marker.require_name()
            value = self._resolve(field_name)
            self.stats['fields'] += 1

            replaced = self.matcher.replace(body, field_name, value)
            self.stats['replaced'] += replaced
            replaced_by_name[field_name] = replaced_by_name.get(field_name, 0) + replaced
            self.logger.debug("  > %s -> %d placeholder(s)", field_name, replaced)

        # A repeated field finds nothing the second time; only names never shown count
        unmatched = [name for name, count in replaced_by_name.items() if not count]
        for name in unmatched:
            self.logger.debug("  > %s has no single-run placeholder text", name)
        self.stats['unmatched'] = len(unmatched)
        return self.stats

    def _resolve(self, field_name: str) -> str:
        try:
            value = self.resolver.resolve(field_name)
        except FieldNotFound:
            raise
        except Exception as e:
            raise FieldNotFound(field_name, f"{type(e).__name__}: {e}") from e
        return '' if value is None else str(value)

    def merge(self, template_bytes: bytes) -> bytes:
        """
        Merge a template held as bytes and return the merged package bytes.

        The template bytes are never modified; a fresh package is opened for
        this merge and discarded if any step fails.
        """
        package = DocxPackage.open(template_bytes)
        stats = self.merge_package(package)
        merged = package.to_bytes()
        self.logger.info("  > Merged %d field(s), replaced %d placeholder(s)",
                         stats['fields'], stats['replaced'])
        if stats['unmatched']:
            self.logger.warning("  > ⚠️ %d field(s) had no matching placeholder text", stats['unmatched'])
        return merged

    def process(self, template_bytes: bytes, output_buffers: List[bytes]) -> MergeResult:
        """
        Merge one document and append its bytes to ``output_buffers``.

        Nothing is appended when the merge fails.

        Returns:
            MergeResult carrying the merged bytes or the error
        """
        try:
            merged = self.merge(template_bytes)
        except MergeError as e:
            self.logger.error("  > ❌ %s", e.describe())
            return MergeResult.failure(e)

        output_buffers.append(merged)
        return MergeResult.ok(merged)
