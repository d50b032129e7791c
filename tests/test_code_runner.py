import os
import sys

import pytest

from careerconnect.services.code_runner import CodeRunner, TIME_LIMIT_MESSAGE, UnsupportedLanguageError


@pytest.fixture
def work_dir(tmp_path):
    return str(tmp_path / "runs")


def _runner(work_dir, **kwargs):
    kwargs.setdefault("timeout", 10)
    return CodeRunner(temp_dir=work_dir, python_command=sys.executable, **kwargs)


def test_runs_python_with_stdin(work_dir):
    result = _runner(work_dir).run("python", "name = input()\nprint('hello', name)", "world")
    assert result.to_dict() == {"output": "hello world\n", "error": False}


def test_runtime_error_returns_stderr(work_dir):
    result = _runner(work_dir).run("python", "raise SystemExit('boom')")
    assert result.error is True
    assert "boom" in result.output


def test_silent_failure_reports_exit_code(work_dir):
    result = _runner(work_dir).run("python", "import sys\nsys.exit(3)")
    assert result.error is True
    assert result.output == "Process exited with code 3"


def test_time_limit(work_dir):
    result = _runner(work_dir, timeout=1).run("python", "while True:\n    pass")
    assert result.to_dict() == {"output": TIME_LIMIT_MESSAGE, "error": True}


def test_output_is_capped(work_dir):
    result = _runner(work_dir, max_output_bytes=10).run("python", "print('x' * 100)")
    assert result.output == "x" * 10


def test_work_directory_is_removed(work_dir):
    runner = _runner(work_dir)
    runner.run("python", "print(1)")
    runner.run("python", "raise ValueError()")
    assert os.listdir(work_dir) == []


def test_unsupported_language(work_dir):
    with pytest.raises(UnsupportedLanguageError):
        _runner(work_dir).run("ruby", "puts 1")


def test_missing_toolchain_raises(work_dir):
    runner = CodeRunner(temp_dir=work_dir, python_command=os.path.join(work_dir, "no-such-python"))
    with pytest.raises(OSError):
        runner.run("python", "print(1)")
    assert os.listdir(work_dir) == []


def test_run_endpoint(client):
    response = client.post("/api/dsa/run", json={"language": "python", "code": "print(6 * 7)"})
    assert response.status_code == 200
    assert response.json() == {"output": "42\n", "error": False}


def test_run_endpoint_rejects_bad_requests(client):
    response = client.post("/api/dsa/run", json={"language": "python", "code": ""})
    assert response.status_code == 400
    assert response.json() == {"output": "No code provided."}

    response = client.post("/api/dsa/run", json={"language": "brainfuck", "code": "+"})
    assert response.status_code == 400
    assert response.json() == {"output": "Unsupported language."}


def test_run_endpoint_missing_toolchain(client, runner, tmp_path):
    runner.python_command = str(tmp_path / "no-such-python")
    response = client.post("/api/dsa/run", json={"language": "python", "code": "print(1)"})
    assert response.status_code == 500
    assert response.json() == {"output": "Internal Server Error during execution.", "error": True}


def test_undecodable_output_is_replaced(work_dir):
    code = "import sys\nsys.stdout.buffer.write(b'\\xff\\xfe ok')"
    result = _runner(work_dir).run("python", code)
    assert result.error is False
    assert result.output == "�� ok"


def test_run_endpoint_undecodable_output(client):
    code = "import sys\nsys.stdout.buffer.write(b'\\xff ok')"
    response = client.post("/api/dsa/run", json={"language": "python", "code": code})
    assert response.status_code == 200
    assert response.json() == {"output": "� ok", "error": False}
