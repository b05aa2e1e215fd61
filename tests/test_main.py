"""
Tests for the console entry point

Run with: python -m pytest tests/test_main.py -v
"""

from labwork.main import main, parse_args


def run_main(tmp_path, *extra):
    data_file = tmp_path / "data.txt"
    main(["--data-file", str(data_file), *extra])
    return data_file


class TestParseArgs:
    """Test command line parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.count == 20
        assert args.skip_users is False

    def test_overrides(self):
        args = parse_args(["--count", "5", "--skip-users", "--message", "hi"])
        assert args.count == 5
        assert args.skip_users is True
        assert args.message == "hi"


class TestMain:
    """Test the full demo output."""

    def test_sequence_output_in_order(self, tmp_path, capsys):
        run_main(tmp_path, "--skip-users")
        out = capsys.readouterr().out.splitlines()

        start = out.index("Fibonacci sequence: ")
        expected = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144, 233, 377, 610, 987, 1597, 2584, 4181]
        assert out[start + 1:start + 21] == [f"F({i}) = {v}" for i, v in enumerate(expected)]
        assert len(out) == start + 21

    def test_file_written_then_echoed(self, tmp_path, capsys):
        data_file = run_main(tmp_path, "--skip-users", "--message", "hello file")
        out = capsys.readouterr().out.splitlines()

        assert out[:2] == ["Data successfully written to file", "hello file"]
        assert data_file.read_text(encoding="utf-8") == "hello file\n"

    def test_file_appends_across_runs(self, tmp_path, capsys):
        run_main(tmp_path, "--skip-users", "--count", "0")
        run_main(tmp_path, "--skip-users", "--count", "0")
        out = capsys.readouterr().out.splitlines()

        assert out[-3:] == [
            "Some data to be written to the file",
            "Some data to be written to the file",
            "Fibonacci sequence: ",
        ]

    def test_users_demo(self, tmp_path, capsys):
        run_main(tmp_path, "--count", "3")
        out = capsys.readouterr().out.splitlines()

        start = out.index("Active Users:")
        assert out[start:] == [
            "Active Users:",
            "Alice - alice@example.com",
            "Charlie - charlie@example.com",
            "Users with Orders:",
            "Alice - Orders: 2",
            "Bob - Orders: 1",
        ]
