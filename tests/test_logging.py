from calcomp.logging import format_error_report, write_instruction_log


def test_error_report() -> None:
    assert format_error_report([]) == []
    assert format_error_report(["a"]) == ["1 error found when reading plot file:", "", "a"]
    assert format_error_report(["a", "b"])[0] == "2 errors found when reading plot file:"


def test_instruction_log(tmp_path) -> None:
    destination = tmp_path / "logs" / "plot.txt"
    write_instruction_log(["Header record:", "PenDown"], destination)
    assert destination.read_text(encoding="utf-8") == "Header record:\nPenDown\n"

    write_instruction_log([], destination)
    assert destination.read_text(encoding="utf-8") == ""
