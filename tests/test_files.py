import os
from pathlib import Path
import pytest
from notestash import files


def test_atomic_write_creates_and_replaces(fs):
    fs.create_dir('/notes')
    files.atomic_write('/notes/one', 'first')
    assert Path('/notes/one').read_text() == 'first'
    files.atomic_write('/notes/one', 'second', fsync=False)
    assert Path('/notes/one').read_text() == 'second'
    assert os.listdir('/notes') == ['one']


def test_atomic_write_cleans_up_on_failure(fs, mocker):
    fs.create_file('/notes/one', contents='original')
    mocker.patch('notestash.files.os.replace', side_effect=OSError(28, 'No space left on device'))
    with pytest.raises(OSError, match='No space left on device'):
        files.atomic_write('/notes/one', 'changed')
    mocker.stopall()
    assert os.listdir('/notes') == ['one']
    assert Path('/notes/one').read_text() == 'original'


def test_temp_names(mocker):
    mocker.patch('shortuuid.uuid', return_value='abc123')
    path = files.temp_path('/notes')
    assert path == '/notes/.abc123.tmp'
    assert files.is_temp_name(os.path.basename(path))
    assert not files.is_temp_name('abc123.tmp')
    assert not files.is_temp_name('.abc123.tmp.bak')
    assert not files.is_temp_name('.hidden')


def test_remove_stale_temp_files(fs):
    fs.create_file('/notes/.one.tmp')
    fs.create_file('/notes/.two.tmp')
    fs.create_file('/notes/.fresh.tmp')
    os.utime('/notes/.one.tmp', (0, 0))
    os.utime('/notes/.two.tmp', (0, 0))
    fs.create_file('/notes/three.tmp')
    fs.create_dir('/notes/.four.tmp')
    assert files.remove_stale_temp_files('/notes') == 2
    assert sorted(os.listdir('/notes')) == ['.four.tmp', '.fresh.tmp', 'three.tmp']
    assert files.remove_stale_temp_files('/notes', max_age=-1) == 1
    assert sorted(os.listdir('/notes')) == ['.four.tmp', 'three.tmp']
