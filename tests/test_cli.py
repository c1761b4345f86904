import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

import getorinsert
from getorinsert.__main__ import PACKAGE_LOGGER_NAME, main


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root_logger = logging.getLogger()
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers, level = root_logger.handlers[:], root_logger.level
    package_level = package_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    package_logger.setLevel(package_level)


@pytest.fixture
def mapping_file_path(tmp_path: Path) -> Path:
    result = tmp_path / 'mapping.toml'
    result.write_text(
        'title = "colors"\n\n[palette]\nred = 1\ngreen = 2\n', 'utf-8'
    )
    return result


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ['--version'])

    assert result.exit_code == 0
    assert result.stdout.strip() == getorinsert.__version__


def test_resolve_with_default(
    runner: CliRunner, mapping_file_path: Path
) -> None:
    result = runner.invoke(
        main,
        [
            'resolve',
            '--mapping-file-path',
            str(mapping_file_path),
            '--table',
            'palette',
            '--default',
            '0',
            'red',
            'blue',
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {'red': 1, 'blue': 0}


def test_resolve_without_default(
    runner: CliRunner, mapping_file_path: Path
) -> None:
    result = runner.invoke(
        main,
        ['resolve', '--mapping-file-path', str(mapping_file_path), 'missing'],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {'missing': None}


def test_resolve_with_default_template(
    runner: CliRunner, mapping_file_path: Path
) -> None:
    result = runner.invoke(
        main,
        [
            'resolve',
            '--mapping-file-path',
            str(mapping_file_path),
            '--table',
            'palette',
            '--default-template',
            'no {key}',
            'green',
            'blue',
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {'green': 2, 'blue': 'no blue'}


def test_resolve_with_formatted_default_template(
    runner: CliRunner, mapping_file_path: Path
) -> None:
    result = runner.invoke(
        main,
        [
            'resolve',
            '--mapping-file-path',
            str(mapping_file_path),
            '--default-template',
            '{key!r}:{key:>5}',
            'blue',
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {'blue': "'blue': blue"}


def test_resolve_print_mapping(
    runner: CliRunner, mapping_file_path: Path
) -> None:
    original_content = mapping_file_path.read_text('utf-8')

    result = runner.invoke(
        main,
        [
            'resolve',
            '--mapping-file-path',
            str(mapping_file_path),
            '--table',
            'palette',
            '--default',
            '[3]',
            '--print-mapping',
            'blue',
            'red',
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {'red': 1, 'green': 2, 'blue': [3]}
    assert mapping_file_path.read_text('utf-8') == original_content


def test_resolve_verbose(runner: CliRunner, mapping_file_path: Path) -> None:
    result = runner.invoke(
        main,
        [
            '-vv',
            'resolve',
            '--mapping-file-path',
            str(mapping_file_path),
            '--table',
            'palette',
            'red',
        ],
    )

    assert result.exit_code == 0, result.output
    assert 'Resolving 1 key(s)' in result.stderr
    assert json.loads(result.stdout) == {'red': 1}


def test_resolve_with_logging_configuration_file(
    runner: CliRunner, mapping_file_path: Path, tmp_path: Path
) -> None:
    logging_configuration_file_path = tmp_path / 'logging.toml'
    logging_configuration_file_path.write_text(
        'version = 1\n'
        'disable_existing_loggers = false\n'
        '\n'
        '[loggers.getorinsert]\n'
        'level = "INFO"\n',
        'utf-8',
    )

    result = runner.invoke(
        main,
        [
            '--logging-configuration-file-path',
            str(logging_configuration_file_path),
            '-v',
            'resolve',
            '--mapping-file-path',
            str(mapping_file_path),
            'title',
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {'title': 'colors'}
    assert logging.getLogger(PACKAGE_LOGGER_NAME).level == logging.DEBUG


@pytest.mark.parametrize(
    'arguments,message',
    [
        (['--table', 'palette.dark', 'red'], 'is missing'),
        (['--table', 'title', 'red'], 'expected to be'),
        (['--default', 'not json', 'red'], 'expected JSON literal'),
        (['--table', 'palette..dark', 'red'], 'should not be empty'),
        (['--table', '.', 'red'], 'should not be empty'),
        (['--default-template', '{other}', 'red'], 'expected template'),
        (['--default-template', '{key.upper}', 'red'], 'expected template'),
        (['--default-template', '{key[0]}', 'red'], 'expected template'),
        (['--default-template', '{key:d}', 'red'], 'expected template'),
        (['--default-template', '{key:{key}}', 'red'], 'expected template'),
        (['--default-template', '{}', 'red'], 'expected template'),
        (['--default-template', '{key', 'red'], 'expected template'),
        (
            ['--default', '0', '--default-template', '{key}', 'red'],
            'mutually exclusive',
        ),
        ([], 'Missing argument'),
    ],
)
def test_resolve_invalid_input(
    runner: CliRunner,
    mapping_file_path: Path,
    arguments: list[str],
    message: str,
) -> None:
    result = runner.invoke(
        main,
        ['resolve', '--mapping-file-path', str(mapping_file_path), *arguments],
    )

    assert result.exit_code != 0
    assert message in result.stderr


def test_resolve_invalid_toml(runner: CliRunner, tmp_path: Path) -> None:
    mapping_file_path = tmp_path / 'invalid.toml'
    mapping_file_path.write_text('key = ', 'utf-8')

    result = runner.invoke(
        main,
        ['resolve', '--mapping-file-path', str(mapping_file_path), 'key'],
    )

    assert result.exit_code == 1
    assert 'TOML file' in result.stderr
