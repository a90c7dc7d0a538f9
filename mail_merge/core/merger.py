"""
Mail merge orchestration module.

This module contains the MailMerger class that runs a complete batch: template
preparation, one merge per record, composition of all merged documents and
writing the combined result.
"""

import os
from typing import Iterable, List, Optional

from ..core.errors import MalformedDocument, MergeError, MergeResult, PackagingFailure
from ..document.body_composer import BodyComposer
from ..document.resolvers import ValueResolver
from ..document.substitution_engine import SubstitutionEngine
from ..document.template_converter import TemplateConverter
from ..utils.file_manager import FileManager
from ..utils.logging_config import get_logger
from ..utils.validators import Validators


class MailMerger:
    """Main orchestrator class for a mail merge batch."""

    def __init__(self, template_path: str, output_path: str, keep_temp: bool = False,
                 write_individual: bool = False):
        """
        Initialize the mail merger.

        Args:
            template_path: Path to the .dotx or .docx template
            output_path: Path for the combined .docx output
            keep_temp: Whether to keep temporary files for debugging
            write_individual: Also write each merged document next to the output
        """
        self.template_path = template_path
        self.output_path = output_path
        self.keep_temp = keep_temp
        self.write_individual = write_individual
        self.logger = get_logger()

        # Initialize components
        self.file_manager = FileManager(keep_temp)
        self.validators = Validators()
        self.template_converter = TemplateConverter()
        self.composer = BodyComposer()

        # Process state
        self.is_template = False
        self.template_bytes: Optional[bytes] = None
        self.converted_path: Optional[str] = None
        self.merged_documents: List[bytes] = []
        self.combined_bytes: Optional[bytes] = None
        self.last_error: Optional[MergeError] = None

    def run(self, resolvers: Iterable[ValueResolver]) -> MergeResult:
        """
        Run the complete batch.

        Args:
            resolvers: One value resolver per record, in output order

        Returns:
            MergeResult whose value is the output path; on failure nothing is written
        """
        try:
            with self.file_manager:
                if not self._initialize(): return self._failed()
                if not self._validate_inputs(): return self._failed()
                if not self._prepare_template(): return self._failed()
                if not self._merge_records(resolvers): return self._failed()
                if not self._combine_documents(): return self._failed()
                if not self._write_output(): return self._failed()
                self.logger.info("\n=== Mail Merge Successful ===")
                return MergeResult.ok(self.output_path)
        except Exception as e:
            self.logger.error("❌ A critical error occurred: %s", e, exc_info=True)
            return MergeResult.failure(PackagingFailure(f"{type(e).__name__}: {e}"))

    def _failed(self) -> MergeResult:
        return MergeResult.failure(self.last_error or PackagingFailure("Mail merge failed"))

    def _fail(self, error: MergeError) -> bool:
        self.last_error = error
        self.logger.error("  > ❌ %s", error.describe())
        return False

    def _initialize(self) -> bool:
        """[Stage 1/6: Initialization] Reset batch state."""
        self.logger.info("[Stage 1/6: Initialization]")
        self.merged_documents = []
        self.combined_bytes = None
        self.last_error = None
        self.logger.debug("  > Template: %s", self.template_path)
        self.logger.debug("  > Output DOCX: %s", self.output_path)
        self.logger.info("  > Environment initialized.")
        return True

    def _validate_inputs(self) -> bool:
        """[Stage 2/6: Input Validation] Validate template and output paths."""
        self.logger.info("[Stage 2/6: Input Validation]")

        template_result = self.validators.validate_template_path(self.template_path)
        if not template_result['valid']:
            return self._fail(MalformedDocument(template_result['error_message']))
        self.is_template = template_result['is_template']
        self.logger.info("  > Template is valid (%.1f MB).", template_result['file_size_mb'])

        output_result = self.validators.validate_output_path(self.output_path)
        if not output_result['valid']:
            return self._fail(PackagingFailure(output_result['error_message']))
        if output_result['file_exists']:
            self.logger.warning("  > ⚠️ Output file exists and will be overwritten.")
        self.logger.info("  > Validation complete.")
        return True

    def _prepare_template(self) -> bool:
        """[Stage 3/6: Template Preparation] Convert a .dotx template when needed."""
        self.logger.info("[Stage 3/6: Template Preparation]")
        if not self.is_template:
            self.template_bytes = self.file_manager.read_bytes(self.template_path)
            self.logger.info("  > Template is already a document. No conversion needed.")
            return True

        result = self.convert_template()
        if not result:
            return self._fail(result.error)
        return True

    def convert_template(self) -> MergeResult:
        """
        Convert the .dotx template to a document and keep its bytes for merging.

        The converted document is also written to a temporary file, which is
        kept when ``keep_temp`` is set.
        """
        template_bytes = self.file_manager.read_bytes(self.template_path)
        result = self.template_converter.convert_result(template_bytes, self.template_path)
        if not result:
            return result

        self.template_bytes = result.value
        self.converted_path = self.file_manager.generate_temp_path(self.template_path, "converted", ".docx")
        self.file_manager.write_bytes(self.converted_path, self.template_bytes)
        self.logger.debug("  > Converted document: %s", self.converted_path)
        return result

    def _merge_records(self, resolvers: Iterable[ValueResolver]) -> bool:
        """[Stage 4/6: Record Merge] Merge the template once per record, in order."""
        self.logger.info("[Stage 4/6: Record Merge]")
        count = 0
        for count, resolver in enumerate(resolvers, 1):
            self.logger.info("  Merging record %d...", count)
            result = self.process(resolver)
            if not result:
                self.last_error = result.error
                self.logger.error("  > ❌ Record %d failed, aborting batch.", count)
                return False

        self.logger.info("  > Merged %d record(s).", count)
        return True

    def process(self, resolver: ValueResolver) -> MergeResult:
        """Merge one record and append the bytes to ``merged_documents``."""
        if self.template_bytes is None:
            return MergeResult.failure(MalformedDocument("template has not been loaded"))
        engine = SubstitutionEngine(resolver)
        return engine.process(self.template_bytes, self.merged_documents)

    def _combine_documents(self) -> bool:
        """[Stage 5/6: Composition] Combine all merged documents."""
        self.logger.info("[Stage 5/6: Composition]")
        result = self.combine()
        if not result:
            return self._fail(result.error)
        self.combined_bytes = result.value
        return True

    def combine(self) -> MergeResult:
        """Combine ``merged_documents`` into one package."""
        return self.composer.combine_result(self.merged_documents)

    def _write_output(self) -> bool:
        """[Stage 6/6: Output] Write optional per-record files, then the combined document."""
        self.logger.info("[Stage 6/6: Output]")
        written: List[str] = []
        try:
            if self.write_individual:
                for path, data in zip(self.individual_paths(), self.merged_documents):
                    self.file_manager.write_bytes(path, data)
                    written.append(path)
                self.logger.info("  > Wrote %d individual document(s).", len(written))
            self.file_manager.write_bytes(self.output_path, self.combined_bytes)
        except OSError as e:
            self._remove_written(written)
            return self._fail(PackagingFailure(f"Cannot write output: {e}"))

        self.logger.info("  > Final document is ready: %s", self.output_path)
        return True

    def _remove_written(self, paths: List[str]) -> None:
        """Remove per-record files of a batch whose output could not be completed."""
        for path in paths:
            try:
                os.remove(path)
            except OSError as e:
                self.logger.warning("  > Could not remove %s: %s", path, e)

    def individual_paths(self) -> List[str]:
        """Paths used for per-record documents: ``<output>_001.docx`` and so on."""
        stem, ext = os.path.splitext(self.output_path)
        return [f"{stem}_{index:03d}{ext}" for index in range(1, len(self.merged_documents) + 1)]
