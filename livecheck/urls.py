"""Canonicalization of forge URLs into repository URLs.

Release archives, tag tarballs and repository pages on the same forge all
point at one Git repository. ``preprocess_url`` maps them onto that
repository's URL so version-control probing sees a single identifier.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import SplitResult, urlsplit

logger = logging.getLogger(__name__)

GITHUB_HOST = r"(?:[^/]+\.)?github\.com"

# Gitea and Gogs instances sharing the /{owner}/{repo}/archive/ layout
GITEA_INSTANCES = ("codeberg.org", "gitea.com", "opendev.org", "tildegit.org", "lolg.it")

REPOSITORY_TEMPLATE = "{scheme}://{host}/{owner}/{repo}.git"


@dataclass(frozen=True)
class CanonicalizationRule:
    """One entry of the rewrite table.

    ``host`` must match the whole lowercased hostname and ``path`` is searched
    in the URL path. ``template`` is formatted with ``scheme``, ``host``
    (hostname only), ``port`` (":<port>" or empty) and the named groups of
    ``path``; a rule without a template keeps the URL as it was.
    """

    name: str
    host: re.Pattern
    path: re.Pattern
    template: Optional[str] = None

    def apply(self, url: str, parts: SplitResult) -> Optional[str]:
        """Rewrite ``url`` if this rule matches.

        Args:
            url: URL as given.
            parts: ``url`` split into its components.

        Returns:
            The rewritten URL, the input URL for a template-less rule,
            or None if the rule does not match.
        """
        if not self.host.fullmatch(parts.hostname or ""):
            return None

        match = self.path.search(parts.path)
        if not match:
            return None

        if self.template is None:
            return url

        port = f":{parts.port}" if parts.port else ""
        return self.template.format(
            scheme=parts.scheme, host=parts.hostname, port=port, **match.groupdict()
        )


def _rule(name: str, host: str, path: str, template: Optional[str] = None):
    return CanonicalizationRule(name, re.compile(host), re.compile(path), template)


RULES: tuple[CanonicalizationRule, ...] = (
    _rule("github-git", GITHUB_HOST, r"\.git/?$"),
    _rule("github-latest-release", GITHUB_HOST, r"/releases/latest/?$"),
    _rule(
        "github-repository",
        GITHUB_HOST,
        r"^/(?P<owner>[^/]+)/(?P<repo>[^/]+)/?$",
        REPOSITORY_TEMPLATE,
    ),
    _rule(
        "github-archive",
        GITHUB_HOST,
        r"^/(?P<owner>[^/]+)/(?P<repo>[^/]+)/(?:archive|releases/download)/",
        REPOSITORY_TEMPLATE,
    ),
    _rule(
        "github-downloads",
        GITHUB_HOST,
        r"^/downloads/(?P<owner>[^/]+)/(?P<repo>[^/]+)/",
        REPOSITORY_TEMPLATE,
    ),
    _rule(
        "github-s3-downloads",
        r"github\.s3\.amazonaws\.com",
        r"^/downloads/(?P<owner>[^/]+)/(?P<repo>[^/]+)/",
        "{scheme}://github.com/{owner}/{repo}.git",
    ),
    # gitlab.com and self-hosted GitLab, recognized by the /-/ separator;
    # self-hosted instances may listen on a non-default port
    _rule(
        "gitlab-archive",
        r".+",
        r"^/(?P<project>[^/]+(?:/[^/]+)+?)/-/archive/",
        "{scheme}://{host}{port}/{project}.git",
    ),
    _rule(
        "gitea-archive",
        r"(?:[^/]+\.)?(?:%s)" % "|".join(re.escape(h) for h in GITEA_INSTANCES),
        r"^/(?P<owner>[^/]+)/(?P<repo>[^/]+)/archive/",
        REPOSITORY_TEMPLATE,
    ),
    # sourcehut clone URLs carry no .git suffix
    _rule(
        "sourcehut-archive",
        r"git\.sr\.ht",
        r"^/(?P<owner>~[^/]+)/(?P<repo>[^/]+)/archive/",
        "{scheme}://{host}/{owner}/{repo}",
    ),
)


def matching_rule(url: str) -> Optional[CanonicalizationRule]:
    """Return the first rule that applies to ``url``, if any."""
    parts = _split(url)
    if parts is None:
        return None

    for rule in RULES:
        if rule.apply(url, parts) is not None:
            return rule
    return None


def preprocess_url(url: str) -> str:
    """Canonicalize a forge URL into its repository URL.

    Unparseable input and URLs no rule recognizes are returned unchanged.

    Args:
        url: URL from a formula, cask or livecheck block.

    Returns:
        Repository URL suitable for a Git probe, or ``url`` itself.
    """
    parts = _split(url)
    if parts is None:
        return url

    for rule in RULES:
        rewritten = rule.apply(url, parts)
        if rewritten is None:
            continue
        logger.debug("Rule %s produced %s", rule.name, rewritten)
        return rewritten

    return url


def _split(url: str) -> Optional[SplitResult]:
    if not isinstance(url, str):
        return None

    try:
        parts = urlsplit(url)
        # Out-of-range ports only surface on access
        parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.hostname:
        return None
    return parts
