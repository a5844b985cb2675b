import subprocess
from unittest import mock

import pytest

from pdfcanvas.subset.harfbuzz import HarfBuzzSubsetter, hb_subset, hb_subset_path


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr=b"")


def test_hb_subset_path_empty_cutset():
    with pytest.raises(ValueError, match="cutset is too small"):
        hb_subset_path("font.ttf", set())


def test_hb_subset_empty_cutset():
    with pytest.raises(ValueError, match="cutset is too small"):
        hb_subset(b"font", set())


@mock.patch("subprocess.run")
def test_hb_subset_path_runs_command(run):
    run.return_value = _completed(b"subset-bytes")
    out = hb_subset_path("/fonts/a.ttf", {"b", "a"})
    assert out == b"subset-bytes"
    args = run.call_args.args[0]
    assert args[0] == "hb-subset"
    assert "--font-file=/fonts/a.ttf" in args
    assert args[args.index("-t") + 1] == "ab"
    assert "--retain-gids" in args
    assert run.call_args.kwargs["input"] is None


@mock.patch("subprocess.run")
def test_hb_subset_feeds_stdin(run):
    run.return_value = _completed(b"out")
    out = hb_subset(b"fontdata", {ord("x")})
    assert out == b"out"
    args = run.call_args.args[0]
    assert "--font-file=/dev/stdin" in args
    assert args[args.index("-t") + 1] == "x"
    assert run.call_args.kwargs["input"] == b"fontdata"


@mock.patch("subprocess.run")
def test_hb_subset_propagates_failure(run):
    run.side_effect = subprocess.CalledProcessError(1, ["hb-subset"])
    with pytest.raises(subprocess.CalledProcessError):
        hb_subset(b"fontdata", {"a"})


def test_subsetter_without_source():
    s = HarfBuzzSubsetter()
    s.init(None, None, "")
    with pytest.raises(ValueError, match="no font source data provided"):
        s.subset({"a"})


@mock.patch("subprocess.run")
def test_subsetter_prefers_path(run):
    run.return_value = _completed(b"from-path")
    s = HarfBuzzSubsetter()
    s.init(None, b"fontdata", "/fonts/b.ttf")
    assert s.subset({"a"}) == b"from-path"
    assert "--font-file=/fonts/b.ttf" in run.call_args.args[0]


@mock.patch("subprocess.run")
def test_subsetter_uses_bytes_without_path(run):
    run.return_value = _completed(b"from-bytes")
    s = HarfBuzzSubsetter()
    s.init(None, b"fontdata", "")
    assert s.subset({"a"}) == b"from-bytes"
    assert run.call_args.kwargs["input"] == b"fontdata"