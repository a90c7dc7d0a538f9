"""
Mail Merge Compiler - template-driven field substitution and document composition for DOCX files.

This package fills Word merge fields («FieldName» placeholders backed by
MERGEFIELD codes) from per-record data and binds the merged documents into a
single DOCX, one record per page-separated section.
"""

__version__ = "1.0.0"
__author__ = "Mail Merge Compiler Team"

from .core.config import Config
from .core.errors import (
    EmptyInputSet,
    FieldNotFound,
    MalformedDocument,
    MalformedField,
    MergeError,
    MergeResult,
    PackagingFailure,
)
from .core.merger import MailMerger
from .document.body_composer import BodyComposer, combine_docs
from .document.field_locator import FieldLocator, FieldMarker
from .document.resolvers import CallableResolver, ChainResolver, DictResolver, load_records
from .document.run_text_matcher import RunTextMatcher
from .document.substitution_engine import SubstitutionEngine
from .document.template_converter import TemplateConverter

__all__ = [
    'Config', 'MailMerger',
    'FieldLocator', 'FieldMarker', 'RunTextMatcher', 'SubstitutionEngine',
    'BodyComposer', 'combine_docs', 'TemplateConverter',
    'DictResolver', 'CallableResolver', 'ChainResolver', 'load_records',
    'MergeError', 'MergeResult', 'MalformedField', 'FieldNotFound',
    'MalformedDocument', 'EmptyInputSet', 'PackagingFailure',
]
