"""
Validation utilities for template, record and output paths.
"""

import os
from typing import Any, Dict, List

from ..core.config import Config


class Validators:
    """Utility class for validating files and paths."""

    @staticmethod
    def _validate_input_file(path: str, extensions: List[str], kind: str) -> Dict[str, Any]:
        result = {
            'valid': False,
            'resolved_path': None,
            'error_message': None,
            'file_size_mb': 0.0
        }

        try:
            resolved_path = os.path.abspath(path)

            if not os.path.exists(resolved_path):
                result['error_message'] = f"File not found: {resolved_path}"
                return result

            if not os.path.isfile(resolved_path):
                result['error_message'] = f"Path is not a file: {resolved_path}"
                return result

            if not any(resolved_path.lower().endswith(ext) for ext in extensions):
                result['error_message'] = f"Not a {kind} file: {resolved_path}"
                return result

            try:
                result['file_size_mb'] = os.path.getsize(resolved_path) / (1024 * 1024)
            except OSError:
                result['file_size_mb'] = 0.0

            result['valid'] = True
            result['resolved_path'] = resolved_path

        except Exception as e:
            result['error_message'] = f"Path validation error: {e}"

        return result

    @staticmethod
    def validate_convertible_path(package_path: str) -> Dict[str, Any]:
        """
        Validate a Word package that can be converted (.dotx, .dotm, .docx, .docm).

        Args:
            package_path: Path to the template or document

        Returns:
            Dict with validation results
        """
        return Validators._validate_input_file(
            package_path, Config.SUPPORTED_CONVERSION_EXTENSIONS, 'Word template')

    @staticmethod
    def validate_template_path(template_path: str) -> Dict[str, Any]:
        """
        Validate a mail merge template path (.dotx or .docx).

        The result carries ``is_template`` so callers know whether the
        template must be converted before merging.
        """
        result = Validators._validate_input_file(
            template_path, Config.SUPPORTED_TEMPLATE_EXTENSIONS, 'Word template')
        result['is_template'] = bool(result['valid']) and template_path.lower().endswith('.dotx')
        return result

    @staticmethod
    def validate_records_path(records_path: str) -> Dict[str, Any]:
        """Validate a CSV or JSON records file path."""
        return Validators._validate_input_file(
            records_path, Config.SUPPORTED_RECORD_EXTENSIONS, 'CSV or JSON records')

    @staticmethod
    def validate_output_path(output_path: str) -> Dict[str, Any]:
        """
        Validate an output file path.

        Args:
            output_path: Desired output file path

        Returns:
            Dict with validation results
        """
        result = {
            'valid': False,
            'resolved_path': None,
            'error_message': None,
            'directory_exists': False,
            'file_exists': False
        }

        try:
            resolved_path = os.path.abspath(output_path)
            directory = os.path.dirname(resolved_path)

            if not any(resolved_path.lower().endswith(ext) for ext in Config.SUPPORTED_DOCX_EXTENSIONS):
                result['error_message'] = f"Output must be a DOCX file: {resolved_path}"
                return result

            # Check if directory exists or can be created
            if not os.path.exists(directory):
                try:
                    os.makedirs(directory, exist_ok=True)
                    result['directory_exists'] = True
                except OSError as e:
                    result['error_message'] = f"Cannot create output directory: {e}"
                    return result
            else:
                result['directory_exists'] = True

            result['file_exists'] = os.path.exists(resolved_path)

            if not os.access(directory, os.W_OK):
                result['error_message'] = f"Cannot write to output location: {directory}"
                return result

            result['valid'] = True
            result['resolved_path'] = resolved_path

        except Exception as e:
            result['error_message'] = f"Output path validation error: {e}"

        return result
