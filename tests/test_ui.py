from flake_updater import ui


def test_tagged_lines_go_to_stderr(capsys, monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    ui.info("hello")
    ui.warn("careful")
    ui.err("broken")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == ["[INFO] hello", "[WARN] careful", "[ERROR] broken"]


def test_color_only_on_tty(monkeypatch):
    class TTY:
        def isatty(self):
            return True

    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setattr(ui.sys, "stderr", TTY())
    assert ui.supports_color()
    assert ui.c("x", ui.RED) == ui.RED + "x" + ui.RESET
    monkeypatch.setenv("NO_COLOR", "1")
    assert not ui.supports_color()


def test_emit_pairs(capsys):
    ui.emit_pairs([("A", "1"), ("B", "two")])
    assert capsys.readouterr().out == "A=1\nB=two\n"
