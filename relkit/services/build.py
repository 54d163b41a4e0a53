"""Build numbering and compiler invocation.

``relkit build`` bumps the persisted counter (or takes an externally assigned
number), exports it, then hands over to the configured build command.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence

from relkit.core.config import Config
from relkit.core.project import Project
from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol
from relkit.platform.process import run_live
from relkit.release.build_counter import BuildCounter, build_env, external_build_number
from relkit.release.errors import BuildError
from relkit.release.manifest import ManifestVersionStore

# Version used for the banner when the manifest cannot be read.
FALLBACK_VERSION = "0.0.0"


class BuildService:
    def __init__(
        self,
        *,
        project: Project,
        config: Config,
        console: ConsoleProtocol,
        counter: BuildCounter | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._state_path = project.resolve(config.build.state_file)
        self._counter = counter or BuildCounter.at(self._state_path)
        self._environ = os.environ if environ is None else environ

    def next_build_number(self) -> Result[int, BuildError]:
        try:
            return Ok(self._counter.next_build_number())
        except OSError as e:
            return Err(
                BuildError(
                    kind="state_io",
                    message=f"failed to persist build number: {e}",
                    hint=str(self._state_path),
                )
            )

    def resolve_build_number(self, override: int | None = None) -> Result[int, BuildError]:
        """Pick the number for this build.

        Precedence: explicit ``override``, then ``$BUILD_NUMBER``, then the
        persisted counter. Only the counter path touches the state file.
        """
        if override is not None:
            return Ok(override)
        external = external_build_number(self._environ)
        if external is not None:
            return Ok(external)
        return self.next_build_number()

    def package_version(self) -> str:
        manifest = self._project.resolve(self._config.manifest.path)
        result = ManifestVersionStore(manifest).get_version()
        if isinstance(result, Err):
            self._console.warning(f"{result.error.message}; using {FALLBACK_VERSION}")
            return FALLBACK_VERSION
        return result.value

    def build(
        self,
        extra_args: Sequence[str] = (),
        *,
        build_number: int | None = None,
        dry_run: bool = False,
    ) -> Result[int, BuildError]:
        """Run the build command with the build number exported.

        Returns:
            Ok(build_number) when the command succeeds.
        """
        number = self.resolve_build_number(build_number)
        if isinstance(number, Err):
            return number

        exported = build_env(self.package_version(), number.value)
        cmd = [*self._config.build.command, *extra_args]
        self._console.note(f"BUILD_NUMBER={number.value}")
        if dry_run:
            self._console.note(f"would run: {' '.join(cmd)}")
            return Ok(number.value)

        result = run_live(cmd, cwd=self._project.root, env={**self._environ, **exported})
        if isinstance(result, Err):
            e = result.error
            if e.stderr:
                return Err(
                    BuildError(
                        kind="compile_failed",
                        message=f"could not start {cmd[0]}: {e.stderr}",
                        returncode=e.returncode,
                        hint="Check [build] command in relkit.toml",
                    )
                )
            return Err(
                BuildError(
                    kind="compile_failed",
                    message=str(e),
                    returncode=e.returncode,
                )
            )
        return Ok(number.value)
