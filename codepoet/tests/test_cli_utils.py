#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from codepoet.cli import codepoet
from codepoet.cli_utils import PROGRAM_NAME, reconstruct_command_line


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Outside of a command the program name is returned"""
        assert reconstruct_command_line(codepoet) == PROGRAM_NAME

    def test_reconstruct_command_line_in_context(self, tmp_path):
        """Existing paths are shortened, flags are kept and defaults are dropped"""
        existing = tmp_path / "input.json"
        existing.write_text("{}")
        captured = {}

        @click.command()
        @click.option("--verbose", "-v", is_flag=True, default=False)
        @click.option("--indent", default="  ")
        @click.argument("path", type=click.Path())
        def command(verbose, indent, path):
            captured["line"] = reconstruct_command_line(command)

        result = CliRunner().invoke(command, ["-v", "--indent", "    ", str(existing)])
        assert result.exit_code == 0, result.output
        assert captured["line"] == "codepoet input.json --verbose --indent     "

    def test_defaults_are_omitted(self, tmp_path):
        captured = {}

        @click.command()
        @click.option("--verbose", "-v", is_flag=True, default=False)
        @click.argument("name")
        def command(verbose, name):
            captured["line"] = reconstruct_command_line(command)

        result = CliRunner().invoke(command, ["taco"])
        assert result.exit_code == 0, result.output
        assert captured["line"] == "codepoet taco"


if __name__ == "__main__":
    pytest.main([__file__])
