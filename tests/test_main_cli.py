"""Tests for the tgmarkup command line tool."""

import json

import pytest

from main import buildShowcase, main, parseArguments
from tgmarkup import Mode, renderMessage, supportedLanguages

# ============================================================================
# Showcase Tests
# ============================================================================


class TestShowcase:
    """Test cases for the showcase command."""

    @pytest.mark.parametrize("mode", list(Mode))
    def testShowcaseFitsMessage(self, mode):
        message = renderMessage(buildShowcase(f"{mode.value} showcase"), mode)
        assert not message.isTooLong()

    def testHtml(self, workDir, capsys):
        assert main(["showcase", "--mode", "HTML"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("HTML showcase\n\n<b>bold text</b>\n<i>italic text</i>\n<u>underline</u>\n")
        assert '<span class="tg-spoiler">spoiler</span>' in out
        assert '<a href="tg://user?id=777000">inline mention of a user</a>' in out
        assert '<tg-emoji emoji-id="5368324170671202286">👍</tg-emoji>' in out
        assert "<pre>pre-formatted fixed-width code block</pre>" in out
        assert '<pre><code class="language-python">pre-formatted' in out
        assert "<blockquote>Block quotation started\nBlock quotation continued\n" in out
        assert out.rstrip("\n").endswith("The last line of the block quotation</blockquote>")
        assert "<blockquote expandable>" in out

    def testMarkdownV2(self, workDir, capsys):
        assert main(["showcase", "--mode", "MarkdownV2"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("MarkdownV2 showcase\n\n*bold text*\n_italic text_\n__underline__\n~strikethrough~\n")
        assert (
            "*_italic bold ~italic bold strikethrough ~||italic bold strikethrough spoiler|| "
            "__underline italic bold___* *bold*"
        ) in out
        assert "[inline URL](http://www.example.com/)" in out
        assert "```python\npre-formatted fixed-width code block written in the Python programming language\n```" in out
        assert ">Block quotation started\n>Block quotation continued\n>The last line of the block quotation" in out

    def testMarkdownDegrades(self, workDir, capsys):
        assert main(["showcase", "--mode", "Markdown"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Markdown showcase\n\n*bold text*\n_italic text_\nunderline\nstrikethrough\nspoiler\n")
        assert "```\npre-formatted fixed-width code block written" in out

    def testTitleEscaped(self, workDir, capsys):
        assert main(["showcase", "--mode", "MarkdownV2", "--title", "Release 1.0"]) == 0
        assert capsys.readouterr().out.startswith("Release 1\\.0\n\n")

    def testModeFromConfig(self, writeToml, capsys):
        path = writeToml("config.toml", '[render]\nmode = "HTML"\n')
        assert main(["-c", str(path), "showcase"]) == 0
        assert capsys.readouterr().out.startswith("HTML showcase\n")

    def testLengthWarning(self, workDir, capsys):
        assert main(["showcase", "--mode", "plain", "--title", "x" * 5000]) == 0
        assert "Telegram will reject it" in capsys.readouterr().err

    def testLengthCheckDisabled(self, writeToml, capsys):
        path = writeToml("config.toml", "[render]\ncheck-length = false\n")
        assert main(["-c", str(path), "showcase", "--title", "x" * 5000]) == 0
        assert "Telegram will reject it" not in capsys.readouterr().err


# ============================================================================
# Language Commands Tests
# ============================================================================


class TestLanguageCommands:
    """Test cases for languages and resolve commands."""

    def testLanguages(self, workDir, capsys):
        assert main(["languages"]) == 0
        assert capsys.readouterr().out.splitlines() == supportedLanguages()

    def testLanguagesWithAliases(self, workDir, capsys):
        assert main(["languages", "--aliases"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "python\tPython\tpy,python" in lines
        assert "javascript\tJavaScript\tjavascript,js" in lines

    def testResolve(self, workDir, capsys):
        assert main(["resolve", "PY"]) == 0
        assert capsys.readouterr().out == "python\n"

    def testResolveNotFound(self, workDir, capsys):
        assert main(["resolve", "klingon"]) == 1
        assert capsys.readouterr().out == "not found\n"

    def testResolveStrict(self, workDir, capsys):
        assert main(["resolve", "klingon", "--strict"]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "klingon" in captured.err

    def testResolveConfiguredAlias(self, writeToml, capsys):
        path = writeToml("config.toml", '[languages.aliases]\ngolang = "go"\n')
        assert main(["--config", str(path), "resolve", "GoLang", "--strict"]) == 0
        assert capsys.readouterr().out == "go\n"

    def testInvalidAliasesConfig(self, writeToml, capsys):
        path = writeToml("config.toml", "[languages.aliases]\ngolang = 1\n")
        assert main(["--config", str(path), "resolve", "go"]) == 1
        assert "must be a string" in capsys.readouterr().err

    def testLanguagesNotTableConfig(self, writeToml, capsys):
        path = writeToml("config.toml", 'languages = "go"\n')
        assert main(["--config", str(path), "resolve", "go"]) == 1
        assert "[languages] must be a table" in capsys.readouterr().err


# ============================================================================
# Escape Command Tests
# ============================================================================


class TestEscapeCommand:
    """Test cases for the escape command."""

    @pytest.mark.parametrize(
        "argv, expected",
        [
            (["escape", "a.b"], "a\\.b"),
            (["escape", "a.b", "--mode", "Markdown"], "a.b"),
            (["escape", "(x)", "--mode", "MarkdownV2", "--kind", "url"], "\\(x\\)"),
            (["escape", "<b>", "--mode", "HTML", "--kind", "code"], "&lt;b&gt;"),
            (["escape", "*x*", "--mode", "plain"], "*x*"),
        ],
    )
    def testEscape(self, workDir, capsys, argv, expected):
        assert main(argv) == 0
        assert capsys.readouterr().out == expected + "\n"

    def testUnknownKindRejected(self, workDir):
        with pytest.raises(SystemExit) as excInfo:
            main(["escape", "x", "--kind", "attribute"])
        assert excInfo.value.code == 2


# ============================================================================
# Arguments and Config Printing Tests
# ============================================================================


class TestArguments:
    """Test cases for argument parsing and --print-config."""

    def testCommandRequired(self):
        with pytest.raises(SystemExit) as excInfo:
            parseArguments([])
        assert excInfo.value.code == 2

    def testPathsMadeAbsolute(self, workDir):
        args = parseArguments(["-c", "config.toml", "--config-dir", "conf.d", "--config-dir", "more", "languages"])
        assert args.config == str(workDir / "config.toml")
        assert args.config_dir == [str(workDir / "conf.d"), str(workDir / "more")]

    def testPrintConfig(self, writeToml, capsys):
        path = writeToml("config.toml", '[render]\nmode = "HTML"\n')
        assert main(["-c", str(path), "--print-config"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("=== tgmarkup Configuration ===\n")
        body = out.split("\n\n")[1]
        assert json.loads(body) == {"render": {"mode": "HTML"}}

    def testMissingConfigExits(self, workDir):
        with pytest.raises(SystemExit) as excInfo:
            main(["-c", "missing.toml", "languages"])
        assert excInfo.value.code == 1
