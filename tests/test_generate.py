from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from dirfill.config import Config
from dirfill.errors import FilesystemError, ImpossibleProgressError
from dirfill.generate import GenerationResult, file_name, generate, write_random_file
from dirfill.progress import NullProgress
from dirfill.rand import RandomSource


class RecordingTask:
    def __init__(self, total: Optional[int]) -> None:
        self.total = total
        self.updates: List[Dict[str, Any]] = []
        self.closed = False

    def __enter__(self) -> "RecordingTask":
        return self

    def __exit__(self, *exc_info) -> None:
        self.closed = True

    def update(self, **kwargs) -> None:
        self.updates.append(kwargs)


class RecordingProgress(NullProgress):
    def __init__(self) -> None:
        self.tasks: List[RecordingTask] = []

    def task(self, total=None, description=None, **kwargs) -> RecordingTask:
        task = RecordingTask(total)
        self.tasks.append(task)
        return task

    @property
    def positions(self) -> List[int]:
        return [update["completed"] for update in self.tasks[0].updates if "total" not in update]

    @property
    def final(self) -> Dict[str, Any]:
        return self.tasks[0].updates[-1]


def collect_files(root: Path) -> Dict[str, Path]:
    files = {}
    for path in root.rglob("*"):
        if path.is_file():
            assert path.name not in files
            files[path.name] = path
    return files


def test_file_name():
    assert file_name(0) == "file_0.txt"
    assert file_name(12) == "file_12.txt"


def test_equal_sizes_flat(tmp_path):
    config = Config(tmp_path / "out", 10 * 1024, 0, 1024, 1024)
    result = generate(config, RandomSource(1))

    assert result == GenerationResult(10, 10 * 1024)
    files = collect_files(config.folder_path)
    assert set(files) == {f"file_{i}.txt" for i in range(10)}
    for path in files.values():
        assert path.parent == config.folder_path
        assert path.stat().st_size == 1024


def test_ceil_file_count(tmp_path):
    config = Config(tmp_path, 5120, 1, 2048, 2048)
    result = generate(config, RandomSource(2))
    assert result == GenerationResult(3, 3 * 2048)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_properties(tmp_path, seed):
    config = Config(tmp_path / str(seed), 20000, 2, 100, 900)
    result = generate(config, RandomSource(seed))

    assert config.target_size <= result.total_bytes < config.target_size + config.max_file_size

    files = collect_files(config.folder_path)
    assert set(files) == {file_name(i) for i in range(result.file_count)}

    total = 0
    for path in files.values():
        size = path.stat().st_size
        assert config.min_file_size <= size <= config.max_file_size
        depth = len(path.relative_to(config.folder_path).parts) - 1
        assert 0 <= depth <= config.max_depth
        total += size
    assert total == result.total_bytes


def test_zero_target(tmp_path):
    folder = tmp_path / "a" / "b"
    progress = RecordingProgress()
    result = generate(Config(folder, 0, 3, 1024, 2048), RandomSource(1), progress)

    assert result == GenerationResult(0, 0)
    assert folder.is_dir()
    assert list(folder.iterdir()) == []
    assert progress.positions == []
    assert progress.tasks[0].total == 0
    assert progress.final == {"total": 0, "completed": 0}
    assert progress.tasks[0].closed


def test_zero_sizes_zero_target(tmp_path):
    assert generate(Config(tmp_path, 0, 0, 0, 0), RandomSource(1)) == GenerationResult(0, 0)


def test_impossible_progress(tmp_path):
    folder = tmp_path / "out"
    with pytest.raises(ImpossibleProgressError) as excinfo:
        generate(Config(folder, 1, 1, 0, 0), RandomSource(1))

    assert excinfo.value.target_size == 1
    assert not folder.exists()


def test_zero_min_size(tmp_path):
    config = Config(tmp_path, 4096, 1, 0, 512)
    result = generate(config, RandomSource(4))
    assert config.target_size <= result.total_bytes < config.target_size + config.max_file_size
    assert sum(path.stat().st_size for path in collect_files(tmp_path).values()) == result.total_bytes


def test_progress_positions(tmp_path):
    progress = RecordingProgress()
    result = generate(Config(tmp_path, 8000, 1, 500, 1500), RandomSource(5), progress)

    assert len(progress.positions) == result.file_count
    assert progress.positions == sorted(progress.positions)
    assert progress.positions[-1] == result.total_bytes
    assert progress.tasks[0].total == 8000
    assert progress.final == {"total": result.total_bytes, "completed": result.total_bytes}
    assert progress.tasks[0].closed


def test_folder_is_file(tmp_path):
    folder = tmp_path / "file"
    folder.write_bytes(b"")

    with pytest.raises(FilesystemError) as excinfo:
        generate(Config(folder, 1024, 0, 1024, 1024), RandomSource(1))

    assert excinfo.value.path == folder
    assert isinstance(excinfo.value.cause, OSError)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_write_random_file_chunks(tmp_path):
    path = tmp_path / "random.bin"
    write_random_file(path, 10, RandomSource(1), buffer_size=3)
    assert path.stat().st_size == 10


def test_write_random_file_truncates(tmp_path):
    path = tmp_path / "random.bin"
    path.write_bytes(b"x" * 100)
    write_random_file(path, 5, RandomSource(1))
    assert path.stat().st_size == 5


def test_write_random_file_missing_dir(tmp_path):
    path = tmp_path / "missing" / "random.bin"
    with pytest.raises(FilesystemError) as excinfo:
        write_random_file(path, 5, RandomSource(1))
    assert excinfo.value.path == path
    assert "random.bin" in str(excinfo.value)
