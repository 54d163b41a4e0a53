"""Homebrew formula rendering.

Rendering is plain ``string.Template`` substitution with no I/O, so it can be
tested without network or filesystem access. The service layer decides where
the document is written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from string import Template

__all__ = [
    "DEFAULT_TEMPLATE",
    "ReleaseDescriptor",
    "class_name",
    "formula_path",
    "render",
    "ruby_string_body",
]

DEFAULT_TEMPLATE = """\
class ${class_name} < Formula
  desc "${description}"
  homepage "${homepage}"
  url "${url}"
  sha256 "${sha256}"
  head "${homepage}.git", branch: "${branch}"

  depends_on "${build_dependency}" => :build

  def install
    system "cargo", "install", *std_cargo_args
  end

  test do
    assert_match "${binary}", shell_output("#{bin}/${binary} --version")
  end
end
"""

_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")


def ruby_string_body(text: str) -> str:
    """Escape ``text`` for use between double quotes in Ruby source."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("#{", "\\#{")


def class_name(repository: str) -> str:
    """Derive a Ruby class name from a repository name.

    >>> class_name("find-symlinks")
    'FindSymlinks'
    """
    parts = _NON_ALNUM_RE.split(repository)
    return "".join(p.capitalize() for p in parts if p)


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    version: str
    owner: str
    repository: str
    homepage: str
    archive_url: str
    sha256: str
    description: str
    branch: str = "main"
    build_dependency: str = "rust"
    binary: str | None = None

    @property
    def identifier_name(self) -> str:
        return class_name(self.repository)

    def substitutions(self) -> dict[str, str]:
        return {
            "class_name": self.identifier_name,
            "description": ruby_string_body(self.description),
            "homepage": self.homepage,
            "url": self.archive_url,
            "sha256": self.sha256,
            "branch": self.branch,
            "build_dependency": self.build_dependency,
            "binary": self.binary or self.repository,
            "version": self.version,
            "owner": self.owner,
            "repository": self.repository,
        }


def render(descriptor: ReleaseDescriptor, template: str = DEFAULT_TEMPLATE) -> str:
    """Fill ``template`` from ``descriptor``.

    Raises:
        KeyError: If the template names a placeholder that is not provided.
        ValueError: If the template contains a malformed placeholder.
    """
    return Template(template).substitute(descriptor.substitutions())


def formula_path(output_dir: Path, repository: str) -> Path:
    """Fixed output location, so reruns overwrite the previous formula."""
    return output_dir / f"{repository}.rb"
