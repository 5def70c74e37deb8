"""Livecheck URL selection and forge URL canonicalization."""

from livecheck.livecheck import (
    cask_name,
    checkable_urls,
    formula_name,
    livecheck_url_to_string,
    package_name,
    status_hash,
    urls_to_check,
)
from livecheck.models import (
    CaskDescriptor,
    FormulaDescriptor,
    LiteralURL,
    LivecheckBlock,
    PackageDescriptor,
    SymbolicURL,
    URLReference,
    URLSymbol,
)
from livecheck.urls import RULES, CanonicalizationRule, preprocess_url

__all__ = [
    "CaskDescriptor",
    "CanonicalizationRule",
    "FormulaDescriptor",
    "LiteralURL",
    "LivecheckBlock",
    "PackageDescriptor",
    "RULES",
    "SymbolicURL",
    "URLReference",
    "URLSymbol",
    "cask_name",
    "checkable_urls",
    "formula_name",
    "livecheck_url_to_string",
    "package_name",
    "preprocess_url",
    "status_hash",
    "urls_to_check",
]
