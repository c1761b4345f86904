import json
import logging
import logging.config
import string
from pathlib import Path
from typing import Any

import click
import tomli
from typing_extensions import Self

import getorinsert
from getorinsert._core.configuration import Configuration
from getorinsert._core.get_or_insert import (
    get_or_insert,
    get_or_insert_with_argument,
)
from getorinsert._core.json_wrapper import JsonWrapper
from getorinsert._core.logging import to_default_logging_configuration

DEFAULT_TEMPLATE_FIELD_NAME = 'key'

PACKAGE_LOGGER_NAME = getorinsert.__name__


class Context:
    @property
    def logger(self, /) -> logging.Logger:
        return self._logger

    _logger: logging.Logger

    __slots__ = ('_logger',)

    def __new__(cls, *, logger: logging.Logger) -> Self:
        self = super().__new__(cls)
        self._logger = logger
        return self


@click.option(
    '--logging-configuration-file-path',
    default=None,
    help=(
        'Path to a file (in TOML format) with logging configurations, '
        'records are written to stderr if omitted.'
    ),
    type=click.Path(
        dir_okay=False,
        exists=True,
        file_okay=True,
        path_type=Path,
        readable=True,
    ),
)
@click.option(
    '-v',
    '--verbose',
    count=True,
    help='Controls logs verbosity level.',
    show_default=False,
)
@click.version_option(getorinsert.__version__, message='%(version)s')
@click.group(context_settings={'show_default': True})
@click.pass_context
def main(
    context: click.Context,
    /,
    *,
    logging_configuration_file_path: Path | None,
    verbose: int,
) -> None:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if logging_configuration_file_path is None:
        logging.config.dictConfig(
            to_default_logging_configuration(
                min_level=max(1, logging.WARNING - 10 * verbose)
            )
        )
    else:
        logging_configuration = tomli.loads(
            logging_configuration_file_path.read_text('utf-8')
        )
        logging.config.dictConfig(logging_configuration)
        new_level = max(1, logger.getEffectiveLevel() - 10 * verbose)
        logger.setLevel(new_level)
    context.obj = Context(logger=logger)


def format_default_template(key: str, template: str, /) -> str:
    return template.format_map({DEFAULT_TEMPLATE_FIELD_NAME: key})


@click.option(
    '--print-mapping',
    is_flag=True,
    help='Print the whole table after resolution instead of resolved keys.',
)
@click.option(
    '--default-template',
    default=None,
    help=(
        'Template of a string to insert for absent keys, '
        'with bare "{key}" placeholders substituted by the key.'
    ),
)
@click.option(
    '--default',
    'raw_default_value',
    default=None,
    help='JSON literal to insert for absent keys, "null" if omitted.',
)
@click.option(
    '--table',
    default='',
    help='Dotted path to the table to resolve keys in, empty for the root.',
)
@click.option(
    '--mapping-file-path',
    help='Path to a file (in TOML format) with the table.',
    required=True,
    type=click.Path(
        dir_okay=False,
        exists=True,
        file_okay=True,
        path_type=Path,
        readable=True,
    ),
)
@click.argument('keys', nargs=-1, required=True)
@main.command
@click.pass_obj
def resolve(
    context: Context,
    /,
    *,
    default_template: str | None,
    keys: tuple[str, ...],
    mapping_file_path: Path,
    print_mapping: bool,
    raw_default_value: str | None,
    table: str,
) -> None:
    """Resolves keys of a TOML table, inserting defaults for absent ones."""
    if default_template is not None and raw_default_value is not None:
        raise click.UsageError(
            'Options "--default" and "--default-template" '
            'are mutually exclusive.'
        )
    default_value = _parse_default_value(raw_default_value)
    if default_template is not None:
        _validate_default_template(default_template)
    logger = context.logger
    try:
        configuration = Configuration.from_toml_file_path(mapping_file_path)
    except tomli.TOMLDecodeError as error:
        raise click.ClickException(
            f'Invalid {mapping_file_path.as_posix()} TOML file: {error}'
        ) from error
    try:
        mapping = configuration.get_table(table)
    except (KeyError, TypeError, ValueError) as error:
        raise click.ClickException(str(error.args[0])) from error
    logger.info(
        'Resolving %s key(s) of %r table from %s.',
        len(keys),
        table,
        mapping_file_path.as_posix(),
    )
    logger.debug('Table before resolution: %s', JsonWrapper(mapping))
    resolved: dict[str, Any] = {}
    for key in keys:
        resolved[key] = (
            get_or_insert(mapping, key, default_value)
            if default_template is None
            else get_or_insert_with_argument(
                mapping, key, format_default_template, default_template
            )
        )
    logger.debug('Table after resolution: %s', JsonWrapper(mapping))
    click.echo(JsonWrapper(mapping if print_mapping else resolved))


def _parse_default_value(raw: str | None, /) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as error:
        raise click.BadParameter(
            f'expected JSON literal, but got {raw!r}: {error}.',
            param_hint='"--default"',
        ) from error


def _validate_default_template(template: str, /) -> None:
    error_message = (
        'expected template with only bare "{key}" placeholders, '
        f'but got {template!r}.'
    )
    try:
        fields = [
            (field_name, format_spec)
            for _, field_name, format_spec, _ in string.Formatter().parse(
                template
            )
            if field_name is not None
        ]
    except ValueError as error:
        raise click.BadParameter(
            error_message, param_hint='"--default-template"'
        ) from error
    if any(
        field_name != DEFAULT_TEMPLATE_FIELD_NAME or '{' in format_spec
        for field_name, format_spec in fields
    ):
        raise click.BadParameter(
            error_message, param_hint='"--default-template"'
        )
    # format specification validity does not depend on the string value
    try:
        format_default_template('', template)
    except ValueError as error:
        raise click.BadParameter(
            error_message, param_hint='"--default-template"'
        ) from error


if __name__ == '__main__':
    main()
