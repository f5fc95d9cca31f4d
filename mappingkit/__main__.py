import enum
import logging
import logging.config
from collections.abc import Iterable, Iterator
from pathlib import Path

import click
import tomli
from typing_extensions import Self

import mappingkit
from mappingkit import CountingMapping, DefaultMapping, LayeredMapping
from mappingkit._core.configuration import (
    Configuration,
    ConfigurationSection,
)

LOGGER_NAME = 'mappingkit'


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
    default=Path.cwd() / 'logging.toml',
    help='Path to a file (in TOML format) with logging configurations.',
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
@click.version_option(mappingkit.__version__, message='%(version)s')
@click.group(context_settings={'show_default': True})
@click.pass_context
def main(
    context: click.Context,
    /,
    *,
    logging_configuration_file_path: Path,
    verbose: int,
) -> None:
    logging_configuration = tomli.loads(
        logging_configuration_file_path.read_text('utf-8')
    )
    logging.config.dictConfig(logging_configuration)
    logger = logging.getLogger(LOGGER_NAME)
    new_level = max(1, logger.getEffectiveLevel() - 10 * verbose)
    logger.setLevel(new_level)
    context.obj = Context(logger=logger)


class DemoTarget(str, enum.Enum):
    DEFAULT_MAPPING = 'default_mapping'
    COUNTING_MAPPING = 'counting_mapping'
    LAYERED_MAPPING = 'layered_mapping'

    def __str__(self, /) -> str:
        return self.value


@click.option(
    '--configuration-file-path',
    default=Path.cwd() / 'demo.toml',
    help='Path to a file (in TOML format) with demonstration inputs.',
    type=click.Path(
        dir_okay=False, exists=True, file_okay=True, path_type=Path
    ),
)
@click.argument(
    'targets',
    nargs=-1,
    type=click.Choice([target.value for target in DemoTarget]),
)
@main.command
@click.pass_obj
def demo(
    context: Context,
    /,
    *,
    configuration_file_path: Path,
    targets: tuple[str, ...],
) -> None:
    configuration = Configuration.from_toml_file_path(configuration_file_path)
    logger = context.logger
    selected_targets = [
        target
        for target in DemoTarget
        if len(targets) == 0 or target.value in targets
    ]
    for target in selected_targets:
        logger.info('Running %s demonstration.', target)
        section = configuration.get_section(target.value)
        if target is DemoTarget.COUNTING_MAPPING:
            lines = _demo_counting_mapping(section, logger=logger)
        elif target is DemoTarget.DEFAULT_MAPPING:
            lines = _demo_default_mapping(section, logger=logger)
        else:
            assert target is DemoTarget.LAYERED_MAPPING, target
            lines = _demo_layered_mapping(section, logger=logger)
        click.echo(f'{target}:')
        for line in lines:
            click.echo(f'  {line}')
        logger.info('Finished %s demonstration.', target)


def _demo_counting_mapping(
    section: ConfigurationSection, /, *, logger: logging.Logger
) -> Iterator[str]:
    counts: CountingMapping[str] = CountingMapping(
        section.get_subsection('seed').extract_values(int)
    )
    logger.debug('Seeded counts: %r.', counts)
    counts += section.get_subsection('addend').extract_values(int)
    yield f'combine_add: {_join_elements(counts.elements())}'
    counts.update(section.get_list('update').extract_elements(str))
    yield f'update: {_join_elements(counts.elements())}'
    most_common_count = section['most_common'].extract_exact(int)
    yield (
        f'most_common({most_common_count}): '
        f'{_join_entries(counts.most_common(most_common_count))}'
    )
    yield f'most_common(): {_join_entries(counts.most_common())}'
    counts -= section.get_subsection('subtrahend').extract_values(int)
    logger.debug('Counts after subtraction: %r.', counts)
    yield f'combine_subtract: {_join_elements(counts.elements())}'
    yield f'total: {counts.total()}'


def _demo_default_mapping(
    section: ConfigurationSection, /, *, logger: logging.Logger
) -> Iterator[str]:
    default = section['default'].extract_exact(int)
    mapping: DefaultMapping[str, int] = DefaultMapping(
        lambda: default, section.get_subsection('entries').extract_values(int)
    )
    for key in section.get_list('probes').extract_elements(str):
        if key not in mapping:
            logger.debug('Key %r will be filled with default.', key)
        yield f'{key}: {mapping.get_or_create(key)}'
    yield f'entries: {_join_entries(mapping.items())}'


def _demo_layered_mapping(
    section: ConfigurationSection, /, *, logger: logging.Logger
) -> Iterator[str]:
    layers_list = section.get_list('layers')
    if len(layers_list) == 0:
        raise ValueError(f'Invalid {layers_list}: should not be empty.')
    layers = [
        layers_list.get_subsection(index).extract_values(int)
        for index in range(len(layers_list))
    ]
    view: LayeredMapping[str, int] = LayeredMapping(*layers)
    front = section.get_subsection('front').extract_values(int)
    extended_view = view.prepend(front)
    flattened = extended_view.flatten()
    yield f'prepend + flatten: {_join_entries(flattened.items())}'
    for key in section.get_list('probes').extract_elements(str):
        try:
            value = view.read(key)
        except KeyError:
            logger.warning('Key %r is missing from every layer.', key)
            yield f'read({key}): missing'
        else:
            yield f'read({key}): {value}'
    for key in section.get_list('erase').extract_elements(str):
        erased_count = view.erase(key)
        logger.debug('Erased %s entries for key %r.', erased_count, key)
    for key in section.get_list('increment').extract_elements(str):
        view.read_write(key)
        view[key] += 1
    for index, layer in enumerate(view.layers):
        yield f'layer_at({index}): {_join_entries(layer.items())}'
    depth = len(view.layers)
    try:
        view.layer_at(depth)
    except IndexError:
        logger.debug('Layer with index %s is out of range.', depth)
        yield f'layer_at({depth}): out of range'


def _join_elements(elements: Iterable[str], /) -> str:
    return ''.join(elements)


def _join_entries(entries: Iterable[tuple[str, int]], /) -> str:
    return ' '.join(f'{key}={value}' for key, value in entries)


if __name__ == '__main__':
    main()
