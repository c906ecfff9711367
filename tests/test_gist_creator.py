"""Tests for gist creation orchestration."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gistkit.libs.content_collector import EditorSelection, FileList, SingleFile
from gistkit.libs.content_collector.host import LocalHost
from gistkit.libs.content_collector.ignore import FileTypeIgnorePolicy, GitIgnorePolicy
from gistkit.libs.errors import (
    AuthenticationRequiredError,
    EmptyGistError,
    GistCreationError,
    SelectionError,
)
from gistkit.tools.create_gist import GistCreator, GistOptions


def get_test_config(token='test-token'):
    """Create a test configuration."""
    return {
        'github': {'api_url': 'https://api.github.com', 'token': token},
        'collector': {'use_vcs_ignore': False, 'ignored_patterns': ['*.pyc', '__pycache__']},
        'gist': {'public_by_default': True, 'open_in_browser': False},
    }


@pytest.fixture
def project_dir(tmp_path):
    """Create a small project tree."""
    root = tmp_path / 'proj'
    (root / 'pkg').mkdir(parents=True)
    (root / 'README.md').write_text('# Demo\n', encoding='utf-8')
    (root / 'pkg' / 'mod.py').write_text('VALUE = 1\n', encoding='utf-8')
    (root / 'pkg' / 'mod.pyc').write_bytes(b'\x00')
    (root / 'empty.txt').write_text('', encoding='utf-8')
    return root


@pytest.fixture
def client():
    client = MagicMock()
    client.create_gist.return_value = 'https://gist.github.com/123'
    return client


def make_creator(client, config=None, open_url=None):
    host = LocalHost(
        file_type_policy=FileTypeIgnorePolicy(['*.pyc', '__pycache__']),
        vcs_policy=GitIgnorePolicy(enabled=False),
    )
    return GistCreator(
        config=config or get_test_config(),
        host=host,
        client=client,
        open_url=open_url or MagicMock(),
    )


def test_create_from_directory(project_dir, client):
    creator = make_creator(client)

    result = creator.create(SingleFile(project_dir), GistOptions(description='demo'))

    assert result.url == 'https://gist.github.com/123'
    assert result.files == ['proj_README.md', 'proj_pkg_mod.py']
    assert result.warning is None
    payload, token = client.create_gist.call_args[0]
    assert token == 'test-token'
    assert payload == {
        'description': 'demo',
        'public': 'true',
        'files': {
            'proj_README.md': {'content': '# Demo\n'},
            'proj_pkg_mod.py': {'content': 'VALUE = 1\n'},
        },
    }


def test_create_from_editor_selection(client):
    creator = make_creator(client)
    source = EditorSelection('def f():\n    pass\n', 'util.py', document_text='whole file')

    result = creator.create(source, GistOptions(is_private=True))

    assert result.files == ['util.py']
    payload, _ = client.create_gist.call_args[0]
    assert payload['public'] == 'false'
    assert payload['files'] == {'util.py': {'content': 'def f():\n    pass\n'}}


def test_create_from_file_list(project_dir, client):
    creator = make_creator(client)
    source = FileList((project_dir / 'pkg' / 'mod.py', project_dir / 'README.md'))

    result = creator.create(source, GistOptions())

    assert result.files == ['mod.py', 'README.md']


def test_empty_collection_skips_remote_call(project_dir, client):
    creator = make_creator(client)

    with pytest.raises(EmptyGistError, match="Can't create empty gist"):
        creator.create(SingleFile(project_dir / 'empty.txt'), GistOptions())

    client.create_gist.assert_not_called()


def test_missing_token_requires_login(project_dir, client, monkeypatch):
    monkeypatch.delenv('GITHUB_TOKEN', raising=False)
    creator = make_creator(client, config=get_test_config(token=''))

    with pytest.raises(AuthenticationRequiredError):
        creator.create(SingleFile(project_dir), GistOptions())

    client.create_gist.assert_not_called()


def test_anonymous_gist_needs_no_token(project_dir, client, monkeypatch):
    monkeypatch.delenv('GITHUB_TOKEN', raising=False)
    creator = make_creator(client, config=get_test_config(token=''))

    creator.create(SingleFile(project_dir / 'README.md'), GistOptions(anonymous=True))

    _, token = client.create_gist.call_args[0]
    assert token is None


def test_open_in_browser(project_dir, client):
    open_url = MagicMock()
    creator = make_creator(client, open_url=open_url)

    result = creator.create(SingleFile(project_dir / 'README.md'), GistOptions(open_in_browser=True))

    open_url.assert_called_once_with('https://gist.github.com/123')
    assert result.opened_in_browser


def test_unreadable_files_are_reported(project_dir, client):
    creator = make_creator(client)
    missing = project_dir / 'gone.txt'
    source = FileList((missing, project_dir / 'README.md'))

    result = creator.create(source, GistOptions())

    assert result.files == ['README.md']
    assert result.unreadable_files == [str(missing)]
    assert result.warning == 'Skipped 1 unreadable file(s)'


def test_remote_failure_propagates(project_dir, client):
    client.create_gist.side_effect = GistCreationError('Failed to create gist')
    creator = make_creator(client)

    with pytest.raises(GistCreationError):
        creator.create(SingleFile(project_dir / 'README.md'), GistOptions())


def test_invalid_selection_fails_fast(client):
    creator = make_creator(client)
    with pytest.raises(SelectionError):
        creator.prepare(None, GistOptions())


def test_prepare_does_not_post(project_dir, client):
    creator = make_creator(client)

    request = creator.prepare(SingleFile(project_dir / 'pkg'), GistOptions(description='d'))

    assert request.files == ['pkg_mod.py']
    assert request.payload['description'] == 'd'
    client.create_gist.assert_not_called()


def test_default_options_from_config(client):
    config = get_test_config()
    config['gist'] = {'public_by_default': False, 'open_in_browser': True}
    creator = make_creator(client, config=config)

    options = creator.default_options(description='x')

    assert options.is_private is True
    assert options.open_in_browser is True
    assert options.description == 'x'
