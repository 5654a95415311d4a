"""Tests for the ymlgen CLI.

Covers:
- Parser construction and --help for every command
- generate end to end against a temporary project
- discover and inspect output
"""

import argparse
import asyncio
from unittest.mock import patch

import pytest

from ymlgen.cli import build_parser, main

TITLE_GENERATOR = "def generate(ctx):\n    return ctx.write(ctx.data['title'])\n"
FAILING_GENERATOR = "def generate(ctx):\n    raise RuntimeError('generator exploded')\n"


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A temporary project with a .ymlgen config dir, used as cwd."""
    monkeypatch.delenv("YMLGEN_CONFIG_DIR", raising=False)
    monkeypatch.chdir(tmp_path)
    generators = tmp_path / ".ymlgen" / "generators"
    generators.mkdir(parents=True)
    (generators / "title.py").write_text(TITLE_GENERATOR)
    (generators / "failing.py").write_text(FAILING_GENERATOR)
    return tmp_path


def run(*argv):
    with patch("sys.argv", ["ymlgen", *argv]):
        return main()


class TestParser:
    def test_build_parser_returns_parser(self):
        assert isinstance(build_parser(), argparse.ArgumentParser)

    def test_no_args_shows_help(self, capsys):
        assert run() == 0
        assert "ymlgen" in capsys.readouterr().out

    @pytest.mark.parametrize("cmd", [
        ["--help"],
        ["generate", "--help"],
        ["discover", "--help"],
        ["inspect", "--help"],
    ])
    def test_help_exits_zero(self, cmd):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(cmd)
        assert exc_info.value.code == 0

    def test_generate_options(self):
        args = build_parser().parse_args(["-v", "generate", "a/*.yml", "b.yml", "-c", "cfg", "--no-hooks"])
        assert args.verbose
        assert args.patterns == ["a/*.yml", "b.yml"]
        assert args.config_dir == "cfg"
        assert args.no_hooks

    def test_generate_requires_pattern(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["generate"])
        assert exc_info.value.code != 0


class TestGenerate:
    def test_generates_next_to_data_file(self, project, capsys):
        (project / "doc.yml").write_text("# ymlgen:generator title\n# ymlgen:output *.txt\ntitle: Hello\n")

        assert run("generate", "*.yml") == 0

        assert (project / "doc.txt").read_text() == "Hello"
        out = capsys.readouterr().out
        assert "Generated" in out
        assert "1 succeeded, 0 failed" in out

    def test_multi_output_into_subdirectory(self, project):
        (project / "pages.yml").write_text(
            "# ymlgen:generator title\n"
            "# ymlgen:output out/**.txt\n"
            "home:\n  title: Home\n"
            "about:\n  title: About\n"
        )
        assert run("generate", "pages.yml") == 0
        assert (project / "out" / "home.txt").read_text() == "Home"
        assert (project / "out" / "about.txt").read_text() == "About"

    def test_failing_generator(self, project, capsys):
        (project / "bad.yml").write_text("# ymlgen:generator failing\n# ymlgen:output *.txt\na: 1\n")

        assert run("generate", "*.yml") == 1

        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "generator exploded" in out
        assert not (project / "bad.txt").exists()

    def test_hooks(self, project):
        (project / "doc.yml").write_text(
            "# ymlgen:generator title\n"
            "# ymlgen:output *.txt\n"
            "# ymlgen:success echo ok > success.txt\n"
            "# ymlgen:fail echo bad > fail.txt\n"
            "title: Hello\n"
        )
        assert run("generate", "doc.yml") == 0
        assert (project / "success.txt").exists()
        assert not (project / "fail.txt").exists()

    def test_no_hooks(self, project):
        (project / "doc.yml").write_text(
            "# ymlgen:generator title\n# ymlgen:output *.txt\n# ymlgen:done echo x > done.txt\ntitle: Hi\n"
        )
        assert run("generate", "doc.yml", "--no-hooks") == 0
        assert not (project / "done.txt").exists()

    def test_config_dir_option(self, project):
        other = project / "elsewhere" / "generators"
        other.mkdir(parents=True)
        (other / "title.py").write_text("def generate(ctx):\n    return ctx.write('other')\n")
        (project / "doc.yml").write_text("# ymlgen:generator title\n# ymlgen:output *.txt\ntitle: Hello\n")

        assert run("generate", "doc.yml", "-c", str(project / "elsewhere")) == 0
        assert (project / "doc.txt").read_text() == "other"

    def test_no_matches(self, project, capsys):
        assert run("generate", "*.yml") == 0
        assert "No ymlgen data files matched" in capsys.readouterr().out


class TestDiscoverAndInspect:
    def test_discover(self, project, capsys):
        (project / "a.yml").write_text("# ymlgen:generator title\n")
        (project / "b.yml").write_text("plain: true\n")

        assert run("discover", "*.yml") == 0

        out = capsys.readouterr().out
        assert "Found 1 data file(s)" in out
        assert "a.yml" in out
        assert "b.yml" not in out

    def test_inspect(self, project, capsys):
        (project / "doc.yml").write_text(
            "# ymlgen:generator title\n# ymlgen:output *.txt\n# ymlgen:done make\ntitle: Hello\n"
        )
        assert run("inspect", "doc.yml") == 0
        out = capsys.readouterr().out
        assert "title -> *.txt" in out
        assert "On done: make" in out

    def test_inspect_not_a_data_file(self, project, capsys):
        (project / "plain.yml").write_text("a: 1\n")
        assert run("inspect", "plain.yml") == 1
        assert "not a ymlgen data file" in capsys.readouterr().out

    def test_inspect_bad_directives(self, project, capsys):
        (project / "doc.yml").write_text("# ymlgen:generator title\n")
        assert run("inspect", "doc.yml") == 1
        assert "No ymlgen:output directive found" in capsys.readouterr().out


class TestHooksConcurrency:
    @pytest.mark.asyncio
    async def test_slow_hook_does_not_stall_other_work(self, project):
        from ymlgen.cli.generate import _generate_one
        from ymlgen.plugins.resolver import create_generator_resolver

        data_file = project / "doc.yml"
        data_file.write_text(
            "# ymlgen:generator title\n# ymlgen:output *.txt\n# ymlgen:done sleep 0.5\ntitle: Hello\n"
        )
        resolver = create_generator_resolver(project / ".ymlgen" / "generators")
        ticks = []

        async def ticker():
            loop = asyncio.get_running_loop()
            for _ in range(8):
                ticks.append(loop.time())
                await asyncio.sleep(0.05)

        _, outcome = await asyncio.gather(ticker(), _generate_one(data_file, resolver, True))

        assert not outcome.failed
        assert (project / "doc.txt").read_text() == "Hello"
        gaps = [later - earlier for earlier, later in zip(ticks, ticks[1:])]
        assert max(gaps) < 0.3
