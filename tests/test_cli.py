import json

from click.testing import CliRunner

from jsminify import runner
from jsminify.cli import cli


def run(*args, **kwargs):
    return CliRunner().invoke(cli, list(args), **kwargs)


def test_single_file_text_report(js_dir):
    result = run("--input", str(js_dir / "two.js"))
    assert result.exit_code == 0, result.output
    assert "Processed" in result.stdout
    assert "Reduction:" in result.stdout
    assert (js_dir / "two.min.js").read_text() == "function two(a,b){return a*b;}"


def test_single_file_json_and_options(js_dir, tmp_path):
    out = tmp_path / "out.js"
    result = run("-i", str(js_dir / "one.js"), "-o", str(out), "--shorten-vars", "--json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["output_file"] == str(out)
    assert out.read_text() == "var a=1;"


def test_preserve_license(tmp_path):
    source = tmp_path / "lib.js"
    source.write_text("/*! MIT */\nvar x = 1; // note\n")
    result = run("-i", str(source), "--preserve-license")
    assert result.exit_code == 0, result.output
    assert (tmp_path / "lib.min.js").read_text() == "/*! MIT */\nvar x=1;"


def test_directory_json_report(js_dir):
    result = run("-i", str(js_dir), "--json", "--workers", "2")
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert sorted(item["input_file"].rsplit("/", 1)[-1] for item in data) == ["one.js", "two.js"]


def test_directory_text_report(js_dir):
    result = run("-i", str(js_dir))
    assert result.exit_code == 0, result.output
    assert result.stdout.count("Processed") == 2


def test_missing_input_is_usage_error(tmp_path):
    result = run("-i", str(tmp_path / "nope.js"))
    assert result.exit_code == 2


def test_input_is_required():
    assert run().exit_code == 2


def test_watch_needs_directory(js_dir):
    result = run("-i", str(js_dir / "one.js"), "--watch")
    assert result.exit_code == 2


def test_output_rejected_for_directory(js_dir, tmp_path):
    result = run("-i", str(js_dir), "-o", str(tmp_path / "x.js"))
    assert result.exit_code == 2


def test_unwritable_output_is_fatal(js_dir, tmp_path):
    result = run("-i", str(js_dir / "one.js"), "-o", str(tmp_path / "missing" / "out.js"))
    assert result.exit_code == 1
    assert "Error processing" in result.output


def test_watch_stops_on_interrupt(js_dir, monkeypatch):
    calls = []

    def fake_watch(directory, minifier, interval, on_stats=None):
        calls.append((directory, interval))
        raise KeyboardInterrupt

    monkeypatch.setattr("jsminify.cli.watch_directory", fake_watch)
    result = run("-i", str(js_dir), "--watch", "--interval", "0.5")
    assert result.exit_code == 0, result.output
    assert calls == [(js_dir, 0.5)]


def test_options_from_environment(js_dir, tmp_path):
    out = tmp_path / "env.js"
    result = run(
        "-i", str(js_dir / "one.js"),
        auto_envvar_prefix="JSMINIFY",
        env={"JSMINIFY_OUTPUT_PATH": str(out)},
    )
    assert result.exit_code == 0, result.output
    assert out.read_text() == "var one=1;"


def test_watch_json_reports_each_file(js_dir, monkeypatch):
    def one_cycle(directory, minifier, interval, on_stats=None):
        runner.watch_directory(directory, minifier, interval, on_stats=on_stats, cycles=1)

    monkeypatch.setattr("jsminify.cli.watch_directory", one_cycle)
    result = run("-i", str(js_dir), "--watch", "--json")
    assert result.exit_code == 0, result.output

    decoder = json.JSONDecoder()
    text = result.stdout.strip()
    names = []
    while text:
        item, end = decoder.raw_decode(text)
        names.append(item["input_file"].rsplit("/", 1)[-1])
        text = text[end:].strip()
    assert sorted(names) == ["one.js", "two.js"]
