"""AppContext: state shared by every command.

Built once by the root group and handed to subcommands with
``@click.pass_obj``.  The domain registry is built on first use so that
``--help`` and ``--version`` never touch the config domains.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calpack.errors import CalpackError
from calpack.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from calpack.config.settings import CalpackSettings
    from calpack.services.result import ServiceResult
    from calpack.services.time import TimeService
    from calpack.time.registry import DomainRegistry


class AppContext:
    """Settings, registry and result emission for the running command."""

    def __init__(self, settings: CalpackSettings) -> None:
        self.settings = settings
        self._registry: DomainRegistry | None = None

        from calpack.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> DomainRegistry:
        """Built-in domains plus the ``[domains]`` of the config, built lazily."""
        if self._registry is None:
            from calpack.time.builtins import register_builtins
            from calpack.time.external import ExternalFormat
            from calpack.time.registry import DomainRegistry

            registry = DomainRegistry(ExternalFormat(use_t_separator=self.settings.format.use_t_separator))
            register_builtins(registry)
            for label, config in self.settings.domains.items():
                try:
                    registry.get(config.to_definition(label))
                except CalpackError as exc:
                    msg = f"Invalid domain {label!r} in config: {exc.message}"
                    raise click.ClickException(msg) from exc
            self._registry = registry
        return self._registry

    @property
    def time_service(self) -> TimeService:
        from calpack.services.time import TimeService

        return TimeService(self.registry, self.settings.defaults)

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult and set the exit status.

        Success goes to stdout, with warnings on stderr outside JSON mode.
        Failure goes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON output already carries the warnings.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
