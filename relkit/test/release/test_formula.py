from __future__ import annotations

from pathlib import Path

import pytest

from relkit.release.formula import (
    ReleaseDescriptor,
    class_name,
    formula_path,
    render,
    ruby_string_body,
)

SHA = "a" * 64


def _descriptor(**overrides: object) -> ReleaseDescriptor:
    fields: dict[str, object] = {
        "version": "0.1.0",
        "owner": "octo",
        "repository": "find-symlinks",
        "homepage": "https://github.com/octo/find-symlinks",
        "archive_url": "https://github.com/octo/find-symlinks/archive/refs/tags/v0.1.0.tar.gz",
        "sha256": SHA,
        "description": "Fast symlink finder",
    }
    fields.update(overrides)
    return ReleaseDescriptor(**fields)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("repo", "expected"),
    [
        ("find-symlinks", "FindSymlinks"),
        ("my_cool.tool", "MyCoolTool"),
        ("--lead--trail--", "LeadTrail"),
        ("ALLCAPS", "Allcaps"),
        ("tool2go", "Tool2go"),
        ("x", "X"),
    ],
)
def test_class_name(repo: str, expected: str) -> None:
    assert class_name(repo) == expected


def test_render_default_template() -> None:
    doc = render(_descriptor())

    assert doc == (
        "class FindSymlinks < Formula\n"
        '  desc "Fast symlink finder"\n'
        '  homepage "https://github.com/octo/find-symlinks"\n'
        '  url "https://github.com/octo/find-symlinks/archive/refs/tags/v0.1.0.tar.gz"\n'
        f'  sha256 "{SHA}"\n'
        '  head "https://github.com/octo/find-symlinks.git", branch: "main"\n'
        "\n"
        '  depends_on "rust" => :build\n'
        "\n"
        "  def install\n"
        '    system "cargo", "install", *std_cargo_args\n'
        "  end\n"
        "\n"
        "  test do\n"
        '    assert_match "find-symlinks", shell_output("#{bin}/find-symlinks --version")\n'
        "  end\n"
        "end\n"
    )


def test_render_is_deterministic() -> None:
    assert render(_descriptor()) == render(_descriptor())


def test_render_uses_binary_override_and_branch() -> None:
    doc = render(_descriptor(binary="fsl", branch="trunk"))

    assert 'shell_output("#{bin}/fsl --version")' in doc
    assert 'branch: "trunk"' in doc


def test_render_escapes_quotes_in_description() -> None:
    doc = render(_descriptor(description='Finds "dangling" links in C:\\tmp'))

    assert 'desc "Finds \\"dangling\\" links in C:\\\\tmp"' in doc


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("plain", "plain"),
        ('say "hi"', 'say \\"hi\\"'),
        ("back\\slash", "back\\\\slash"),
        ("no #{interp}", "no \\#{interp}"),
        ("# not interpolation", "# not interpolation"),
    ],
)
def test_ruby_string_body(text: str, expected: str) -> None:
    assert ruby_string_body(text) == expected


def test_render_custom_template() -> None:
    doc = render(_descriptor(), "$class_name $version $owner/$repository $sha256\n")

    assert doc == f"FindSymlinks 0.1.0 octo/find-symlinks {SHA}\n"


def test_render_unknown_placeholder_raises() -> None:
    with pytest.raises(KeyError):
        render(_descriptor(), "$nope")


def test_formula_path_is_fixed_per_repository() -> None:
    assert formula_path(Path("HomebrewFormula"), "find-symlinks") == Path(
        "HomebrewFormula/find-symlinks.rb"
    )
