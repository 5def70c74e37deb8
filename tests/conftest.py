from types import SimpleNamespace

import pytest

from livecheck.models import CaskDescriptor, FormulaDescriptor

CASK_URL = "https://brew.sh/test-0.0.1.dmg"
HEAD_URL = "https://github.com/Homebrew/brew.git"
HOMEPAGE_URL = "https://brew.sh"
LIVECHECK_URL = "https://formulae.brew.sh/api/formula/ruby.json"
STABLE_URL = "https://brew.sh/test-0.0.1.tgz"


@pytest.fixture
def package_urls() -> SimpleNamespace:
    return SimpleNamespace(
        cask=CASK_URL,
        head=HEAD_URL,
        homepage=HOMEPAGE_URL,
        livecheck=LIVECHECK_URL,
        stable=STABLE_URL,
    )


@pytest.fixture
def formula() -> FormulaDescriptor:
    return FormulaDescriptor(
        name="test",
        homepage=HOMEPAGE_URL,
        url=STABLE_URL,
        head=HEAD_URL,
        livecheck={"url": LIVECHECK_URL, "regex": r'"stable":"(\d+(?:\.\d+)+)"'},
    )


@pytest.fixture
def cask() -> CaskDescriptor:
    return CaskDescriptor(
        token="test",
        homepage=HOMEPAGE_URL,
        url=CASK_URL,
        livecheck={"url": LIVECHECK_URL, "regex": r'"stable":"(\d+(?:\.\d+)+)"'},
    )


@pytest.fixture
def plain_formula() -> FormulaDescriptor:
    return FormulaDescriptor(
        name="test_livecheck_url",
        homepage=HOMEPAGE_URL,
        url=STABLE_URL,
        head=HEAD_URL,
    )


@pytest.fixture
def plain_cask() -> CaskDescriptor:
    return CaskDescriptor(token="test_livecheck_url", homepage=HOMEPAGE_URL, url=CASK_URL)
