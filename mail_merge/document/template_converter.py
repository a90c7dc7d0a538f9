"""
Template (.dotx/.dotm) to document (.docx/.docm) conversion.
"""

import io
import os
import zipfile

from docx.opc.package import OpcPackage
from lxml import etree

from ..core.config import Config
from ..core.errors import MalformedDocument, MergeError, MergeResult, PackagingFailure
from ..utils.logging_config import get_docx_logger
from ..utils.validators import Validators


class TemplateConverter:
    """Turns a Word template package into a regular document attached to that template."""

    def __init__(self):
        self.logger = get_docx_logger()

    def convert(self, template_bytes: bytes, template_path: str) -> bytes:
        """
        Convert a template package to a document package.

        The main part's content type is changed from template to document
        (a macro-enabled template becomes a macro-enabled document) and an
        external attachedTemplate relationship pointing at ``template_path``
        is added. Packages that already are documents only gain the
        relationship.

        Args:
            template_bytes: Serialized template package
            template_path: Path recorded as the attached template

        Returns:
            Serialized document package
        """
        try:
            package = OpcPackage.open(io.BytesIO(template_bytes))
            main_part = package.main_document_part
        except Exception as e:
            raise MalformedDocument(f"{type(e).__name__}: {e}") from e

        content_type = main_part.content_type
        document_type = Config.TEMPLATE_TO_DOCUMENT_TYPES.get(content_type)
        if document_type is None and content_type not in Config.TEMPLATE_TO_DOCUMENT_TYPES.values():
            raise MalformedDocument(f"unsupported main part content type '{content_type}'")

        try:
            main_part.relate_to(template_path, Config.ATTACHED_TEMPLATE_RELTYPE, is_external=True)
            output = io.BytesIO()
            package.save(output)
            data = output.getvalue()
            if document_type is not None:
                self.logger.debug("  > Changing main part content type to %s", document_type)
                data = self.set_part_content_type(data, str(main_part.partname), document_type)
        except MergeError:
            raise
        except Exception as e:
            raise PackagingFailure(f"Could not convert template: {type(e).__name__}: {e}") from e

        self.logger.info("  > Converted template '%s' to a document", os.path.basename(template_path))
        return data

    @staticmethod
    def set_part_content_type(package_bytes: bytes, partname: str, content_type: str) -> bytes:
        """
        Return a copy of the package with the content type override of ``partname`` changed.

        Every other zip member is copied unchanged.
        """
        output = io.BytesIO()
        with zipfile.ZipFile(io.BytesIO(package_bytes)) as source, \
                zipfile.ZipFile(output, 'w', zipfile.ZIP_DEFLATED) as target:
            for item in source.infolist():
                data = source.read(item.filename)
                if item.filename == Config.CONTENT_TYPES_PART:
                    data = TemplateConverter._override_content_type(data, partname, content_type)
                target.writestr(item, data)
        return output.getvalue()

    @staticmethod
    def _override_content_type(types_xml: bytes, partname: str, content_type: str) -> bytes:
        root = etree.fromstring(types_xml)
        for override in root.iter(f"{{{Config.CONTENT_TYPES_NAMESPACE}}}Override"):
            if override.get('PartName') == partname:
                override.set('ContentType', content_type)
                break
        else:
            raise MalformedDocument(f"no content type override for part '{partname}'")
        return etree.tostring(root, xml_declaration=True, encoding='UTF-8', standalone=True)

    def convert_result(self, template_bytes: bytes, template_path: str) -> MergeResult:
        """Like ``convert`` but returns a MergeResult instead of raising."""
        try:
            return MergeResult.ok(self.convert(template_bytes, template_path))
        except MergeError as e:
            self.logger.error("  > ❌ %s", e.describe())
            return MergeResult.failure(e)

    def convert_file(self, template_path: str, target_path: str) -> MergeResult:
        """
        Convert the template at ``template_path`` and write the document to ``target_path``.

        Returns:
            MergeResult whose value is the target path
        """
        validation = Validators.validate_convertible_path(template_path)
        if not validation['valid']:
            return MergeResult.failure(PackagingFailure(f"Cannot read template: {validation['error_message']}"))

        try:
            with open(validation['resolved_path'], 'rb') as f:
                template_bytes = f.read()
        except OSError as e:
            return MergeResult.failure(PackagingFailure(f"Cannot read template: {e}"))

        result = self.convert_result(template_bytes, template_path)
        if not result:
            return result

        try:
            with open(target_path, 'wb') as f:
                f.write(result.value)
        except OSError as e:
            return MergeResult.failure(PackagingFailure(f"Cannot write document: {e}"))
        return MergeResult.ok(target_path)
