"""URL selection for livecheck.

Chooses which of a package's URLs are worth checking for new upstream
versions and resolves livecheck URL references against the package.
"""

import logging
from typing import Any, Optional

from livecheck.models import (
    CaskDescriptor,
    FormulaDescriptor,
    LiteralURL,
    PackageDescriptor,
    SymbolicURL,
    URLSymbol,
)
from livecheck.urls import preprocess_url

logger = logging.getLogger(__name__)


def formula_name(formula: FormulaDescriptor, full_name: bool = False) -> str:
    """Return the formula name, tap-qualified when ``full_name`` is set."""
    return formula.full_identifier() if full_name else formula.identifier()


def cask_name(cask: CaskDescriptor, full_name: bool = False) -> str:
    """Return the cask token, tap-qualified when ``full_name`` is set."""
    return cask.full_identifier() if full_name else cask.identifier()


def package_name(package: PackageDescriptor, full_name: bool = False) -> str:
    if isinstance(package, FormulaDescriptor):
        return formula_name(package, full_name=full_name)
    if isinstance(package, CaskDescriptor):
        return cask_name(package, full_name=full_name)
    return package.full_identifier() if full_name else package.identifier()


def status_hash(
    package: PackageDescriptor,
    status: str,
    messages: Optional[list[str]] = None,
    full_name: bool = False,
) -> dict[str, Any]:
    """Build the status record reported for a package that was not checked.

    Args:
        package: Formula or cask the status applies to.
        status: Status tag such as "error" or "skipped".
        messages: Human-readable details; omitted from the record when None.
        full_name: Report the tap-qualified name.

    Returns:
        Dict keyed by the package kind, with status, messages and metadata.
    """
    record: dict[str, Any] = {
        package.kind: package_name(package, full_name=full_name),
        "status": status,
    }
    if messages is not None:
        record["messages"] = list(messages)
    record["meta"] = {"livecheckable": package.livecheckable}
    return record


def checkable_urls(package: PackageDescriptor) -> list[str]:
    """Return the package's URLs in the order they should be checked.

    Formulae offer head, stable and homepage URLs; casks offer their download
    URL and homepage. Missing URLs and repeats are left out.

    Args:
        package: Formula or cask.

    Returns:
        Distinct URLs in priority order.
    """
    if isinstance(package, FormulaDescriptor):
        candidates = [
            package.head_url(),
            package.primary_download_url(),
            package.homepage_url(),
        ]
    else:
        candidates = [package.primary_download_url(), package.homepage_url()]

    urls: list[str] = []
    for url in candidates:
        if url and url not in urls:
            urls.append(url)
    return urls


def livecheck_url_to_string(ref: Any, package: PackageDescriptor) -> Optional[str]:
    """Resolve a livecheck URL reference to a URL string.

    Literal URLs are returned as given. Symbolic references name one of the
    package's URL slots: ``head`` and ``stable`` apply to formulae, ``url``
    to casks and ``homepage`` to both.

    Args:
        ref: LiteralURL, SymbolicURL or None.
        package: Formula or cask the reference belongs to.

    Returns:
        The URL, or None when the reference is missing or does not resolve.
    """
    if isinstance(ref, LiteralURL):
        return ref.url

    if not isinstance(ref, SymbolicURL):
        if ref is not None:
            logger.debug("Unsupported livecheck URL reference %r", ref)
        return None

    try:
        symbol = URLSymbol(ref.tag)
    except ValueError:
        logger.debug("Unknown livecheck URL symbol %r", ref.tag)
        return None

    if symbol is URLSymbol.HOMEPAGE:
        return package.homepage_url()

    if isinstance(package, FormulaDescriptor):
        if symbol is URLSymbol.HEAD:
            return package.head_url()
        if symbol is URLSymbol.STABLE:
            return package.primary_download_url()
    elif isinstance(package, CaskDescriptor):
        if symbol is URLSymbol.URL:
            return package.primary_download_url()

    logger.debug(
        "Livecheck URL symbol %r does not apply to %s %s",
        ref.tag,
        package.kind,
        package.identifier(),
    )
    return None


def urls_to_check(package: PackageDescriptor, preprocess: bool = True) -> list[str]:
    """Return the URLs a livecheck run should probe for ``package``.

    A URL declared in the livecheck block takes precedence over the
    package's own URLs; if it is declared but does not resolve, there is
    nothing to check.

    Args:
        package: Formula or cask.
        preprocess: Canonicalize each URL with ``preprocess_url``.

    Returns:
        Distinct URLs in priority order.
    """
    livecheck = package.livecheck
    if livecheck is not None and livecheck.url is not None:
        resolved = livecheck_url_to_string(livecheck.url, package)
        candidates = [resolved] if resolved else []
    else:
        candidates = checkable_urls(package)

    urls: list[str] = []
    for url in candidates:
        if preprocess:
            url = preprocess_url(url)
        # Canonicalization can collapse distinct URLs onto one repository
        if url not in urls:
            urls.append(url)
    return urls
