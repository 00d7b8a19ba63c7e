"""Shared test fixtures for Reclaim."""

import pytest

from reclaim_core.config.models import ReclaimConfig
from reclaim_core.transcript.models import (
    ChangeDirectory,
    ChangeToParent,
    DirectoryEntry,
    FileEntry,
    ListDirectory,
)

SAMPLE_TRANSCRIPT = """\
$ cd /
$ ls
dir a
14848514 b.txt
8504156 c.dat
dir d
$ cd a
$ ls
dir e
29116 f
2557 g
62596 h.lst
$ cd e
$ ls
584 i
$ cd ..
$ cd ..
$ cd d
$ ls
4060174 j
8033020 d.log
5626152 d.ext
7214296 k
"""


@pytest.fixture
def sample_transcript():
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def sample_tokens():
    """The sample transcript, built by hand instead of lexed."""
    return [
        ChangeDirectory("/"),
        ListDirectory(),
        DirectoryEntry("a"),
        FileEntry("b.txt", 14848514),
        FileEntry("c.dat", 8504156),
        DirectoryEntry("d"),
        ChangeDirectory("a"),
        ListDirectory(),
        DirectoryEntry("e"),
        FileEntry("f", 29116),
        FileEntry("g", 2557),
        FileEntry("h.lst", 62596),
        ChangeDirectory("e"),
        ListDirectory(),
        FileEntry("i", 584),
        ChangeToParent(),
        ChangeToParent(),
        ChangeDirectory("d"),
        ListDirectory(),
        FileEntry("j", 4060174),
        FileEntry("d.log", 8033020),
        FileEntry("d.ext", 5626152),
        FileEntry("k", 7214296),
    ]


@pytest.fixture
def transcript_file(tmp_path, sample_transcript):
    path = tmp_path / "transcript.txt"
    path.write_text(sample_transcript)
    return path


@pytest.fixture
def sample_config():
    return ReclaimConfig()
