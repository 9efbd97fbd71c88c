import json

import click

from . import __version__
from .cli_utils import reconstruct_command_line
from .config import RenderConfig
from .declarations import DeclarationLoader
from .errors import CodePoetError
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log import decisions and render passes")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def codepoet(config, verbose, path, output):
    """Render the Java file declared in PATH (JSON) into OUTPUT."""
    configure_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = RenderConfig.from_dict(json.load(f))
    else:
        config = RenderConfig()

    try:
        java_file = DeclarationLoader(config).load_file(path)
        if config.add_generation_comment:
            command_line = reconstruct_command_line(codepoet)
            comment = f"Generated by codepoet v{__version__} : {command_line}\n"
            if not java_file.file_comment.is_empty():
                comment += "\n"
            builder = java_file.to_builder()
            builder.file_comment.format_parts.insert(0, comment)
            java_file = builder.build()
        rendered = java_file.render()
    except (CodePoetError, ValueError, TypeError) as e:
        logger.error("Could not render %s: %s", path, e)
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        f.write(rendered.text)
    logger.info("Wrote %s (%d imports)", output, len(rendered.imports))
