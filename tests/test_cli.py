import json

from livecheck.cli import main, plan_package
from livecheck.models import CaskDescriptor, FormulaDescriptor

PACKAGES = [
    {
        "name": "brew",
        "homepage": "https://brew.sh",
        "url": "https://github.com/Homebrew/brew/archive/1.0.0.tar.gz",
        "head": "https://github.com/Homebrew/brew.git",
    },
    {
        "token": "skipped-cask",
        "url": "https://brew.sh/test-0.0.1.dmg",
        "livecheck": {"skip": True, "skip_msg": "No version information available"},
    },
    {
        "token": "bad-reference",
        "url": "https://brew.sh/test-0.0.1.dmg",
        "livecheck": {"url": {"tag": "stable"}},
    },
    {"name": "empty"},
]


def _write_packages(tmp_path):
    path = tmp_path / "packages.json"
    path.write_text(json.dumps(PACKAGES))
    return path


def test_plan_package_ok() -> None:
    formula = FormulaDescriptor(
        name="brew",
        homepage="https://brew.sh",
        url="https://github.com/Homebrew/brew/archive/1.0.0.tar.gz",
    )
    assert plan_package(formula) == {
        "formula": "brew",
        "status": "ok",
        "meta": {"livecheckable": False},
        "urls": ["https://github.com/Homebrew/brew.git", "https://brew.sh"],
    }


def test_plan_package_skipped() -> None:
    cask = CaskDescriptor(token="c", url="https://brew.sh/c.dmg", livecheck={"skip": True})
    record = plan_package(cask)
    assert record["status"] == "skipped"
    assert record["messages"] == ["Skipped"]


def test_plan_package_unresolvable_reference() -> None:
    cask = CaskDescriptor(
        token="c", url="https://brew.sh/c.dmg", livecheck={"url": {"tag": "head"}}
    )
    record = plan_package(cask)
    assert record["status"] == "error"
    assert record["messages"] == ["Unable to resolve the livecheck URL"]


def test_main_json(tmp_path, capsys) -> None:
    path = _write_packages(tmp_path)

    assert main([str(path), "--json", "--workers", "2"]) == 0

    results = json.loads(capsys.readouterr().out)
    assert [r["status"] for r in results] == ["ok", "skipped", "error", "error"]
    assert results[0]["urls"] == [
        "https://github.com/Homebrew/brew.git",
        "https://brew.sh",
    ]
    assert results[1]["cask"] == "skipped-cask"
    assert results[1]["messages"] == ["No version information available"]
    assert results[3]["messages"] == ["No URLs available to check"]


def test_main_raw_table(tmp_path, capsys) -> None:
    path = _write_packages(tmp_path)

    assert main([str(path), "--raw"]) == 0

    out = capsys.readouterr().out
    assert "Package" in out
    assert "https://github.com/Homebrew/brew/archive/1.0.0.tar.gz" in out
    assert "No version information available" in out


def test_main_without_packages(tmp_path, capsys) -> None:
    assert main([str(tmp_path / "missing.json")]) == 1
    out = capsys.readouterr().out
    assert "No packages to check" in out
    assert "not found" in out
