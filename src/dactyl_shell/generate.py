import argparse
import logging
import pathlib
from typing import Optional, Sequence

from .config import load_config
from .engines import ENGINES, get_engine
from .generate_configuration import GenerateConfigAction
from .model import run


class LogLevelAction(argparse.Action):
    """
    Set the log level
    """

    log_levels = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }

    def __init__(self, option_strings, dest: str, **kwargs):
        kwargs.update({
            'default': "INFO",
            'type': str,
            'choices': self.log_levels.keys(),
            'help': "The log level to use."
        })
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, _parser: argparse.ArgumentParser, namespace: argparse.Namespace, values: str, _option_string: Optional[str] = None):
        setattr(namespace, self.dest, values)


parser = argparse.ArgumentParser(description="Generate a dactyl keyboard shell.")
parser.add_argument("--generate-config", action=GenerateConfigAction)
parser.add_argument("--config", default=None, type=pathlib.Path, help="A config file to control keyboard generation.")
parser.add_argument("--log-level", action=LogLevelAction)
parser.add_argument("--engine", default=argparse.SUPPRESS, choices=ENGINES, help="Override the configured geometry engine.")
parser.add_argument("--output-dir", default=None, type=pathlib.Path, help="Directory the models are written to.")


def main(argv: Optional[Sequence[str]] = None):
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    overrides = {}
    if "engine" in args:
        overrides["ENGINE"] = args.engine

    config = load_config(args.config, **overrides)
    run(config, get_engine(config.ENGINE), args.output_dir)
