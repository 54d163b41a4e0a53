"""Formula generation for a tagged release.

Sequence: validate the version, read the git remote, resolve owner/repo,
download the tag archive, hash it, render and write the formula. Each step
stops the run on failure; the remote is parsed before any network call.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relkit.core.config import Config
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.git.repository import GitError, Repository
from relkit.output.console import ConsoleProtocol
from relkit.platform.files import atomic_write_text
from relkit.platform.http import HttpClient, RealHttpClient
from relkit.release.archive import ReleaseArchiveFetcher
from relkit.release.errors import FetchError, InputError, OutputError, ParseError
from relkit.release.formula import DEFAULT_TEMPLATE, ReleaseDescriptor, formula_path, render
from relkit.release.remote import RemoteCoordinates, resolve
from relkit.release.semver import parse_version

FormulaError = InputError | ParseError | FetchError | OutputError


class RemoteSource(Protocol):
    def remote_url(self, name: str = "origin") -> Result[str, GitError]: ...


@dataclass(frozen=True, slots=True)
class FormulaOutput:
    path: Path
    content: str
    descriptor: ReleaseDescriptor
    written: bool


class FormulaService:
    def __init__(
        self,
        *,
        project: Project,
        config: Config,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
        repository: RemoteSource | None = None,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._http = http or RealHttpClient(timeout=config.http.timeout)
        self._repository = repository or Repository(project.root)

    def coordinates(self) -> Result[RemoteCoordinates, ParseError]:
        name = self._config.remote.name
        url = self._repository.remote_url(name)
        if isinstance(url, Err):
            return Err(
                ParseError(
                    message=f"cannot read git remote '{name}': {url.error.message}",
                    url="",
                    hint=f"Run: git remote add {name} <url>",
                )
            )
        return resolve(url.value)

    def generate(
        self,
        version: str,
        *,
        dry_run: bool = False,
    ) -> Result[FormulaOutput, FormulaError]:
        parsed = parse_version(version)
        if isinstance(parsed, Err):
            return parsed
        version = str(parsed.value)

        coords = self.coordinates()
        if isinstance(coords, Err):
            return coords
        c = coords.value

        template = self._load_template()
        if isinstance(template, Err):
            return template

        fetcher = ReleaseArchiveFetcher(self._http)
        self._console.note(f"Fetching v{version} of {c.slug}")
        archive = fetcher.fetch(c, version)
        if isinstance(archive, Err):
            return archive

        formula = self._config.formula
        descriptor = ReleaseDescriptor(
            version=version,
            owner=c.owner,
            repository=c.repository,
            homepage=c.homepage,
            archive_url=archive.value.url,
            sha256=archive.value.sha256,
            description=formula.description,
            branch=formula.branch,
            build_dependency=formula.build_dependency,
            binary=formula.binary,
        )

        try:
            content = render(descriptor, template.value)
        except (KeyError, ValueError) as e:
            return Err(
                InputError(
                    message=f"invalid formula template: {e}",
                    value=formula.template or "<built-in>",
                    hint="Placeholders: " + ", ".join(sorted(descriptor.substitutions())),
                )
            )

        path = formula_path(self._project.resolve(formula.output_dir), c.repository)
        if not dry_run:
            try:
                atomic_write_text(path, content, encoding="utf-8")
            except OSError as e:
                return Err(OutputError(message=f"failed to write {path.name}: {e}", path=path))

        return Ok(
            FormulaOutput(path=path, content=content, descriptor=descriptor, written=not dry_run)
        )

    def _load_template(self) -> Result[str, OutputError]:
        configured = self._config.formula.template
        if configured is None:
            return Ok(DEFAULT_TEMPLATE)
        path = self._project.resolve(configured)
        try:
            return Ok(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                OutputError(
                    message=f"failed to read formula template: {e}",
                    path=path,
                    hint="Check [formula] template in relkit.toml",
                )
            )
