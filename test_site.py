from datetime import datetime
import os

import files


def test_root_serves_entry_document(client):
    r = client.get('/')
    assert r.status_code == 200
    assert b'<h1>Portfolio</h1>' in r.data


def test_root_uses_configured_entry_document(make_client, site):
    (site / 'index2.html').write_text('<h1>Second</h1>')
    r = make_client(entry_document='index2.html').get('/')
    assert b'Second' in r.data


def test_static_file(client):
    r = client.get('/style.css')
    assert r.status_code == 200
    assert r.mimetype == 'text/css'
    assert b'color: black' in r.data


def test_missing_static_file_is_404(client):
    assert client.get('/nope.png').status_code == 404


def test_dotfiles_are_not_served(client):
    assert client.get('/.env').status_code == 404


def test_path_traversal_is_not_served(client):
    assert client.get('/../conftest.py').status_code == 404


def test_cors_header(client):
    r = client.get('/api/health', headers={'Origin': 'https://example.com'})
    assert r.headers.get('Access-Control-Allow-Origin') in ('*', 'https://example.com')


def test_health(client, site):
    (site / 'resume.docx').unlink()
    r = client.get('/api/health')
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['message'] == 'Server is healthy'
    assert datetime.fromisoformat(body['timestamp'])
    assert body['services'] == {
        'contact': 'active',
        'resume_download': 'active',
        'static_files': 'active',
    }


def test_check_files(client, site):
    r = client.get('/api/check-files')
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    by_name = {f['file']: f for f in body['files']}
    assert [f['file'] for f in body['files']] == [
        'index.html', 'resume.docx', 'profile.jpg', 'app.py', 'pyproject.toml']
    assert by_name['index.html']['exists'] is True
    assert by_name['resume.docx']['exists'] is True
    assert by_name['profile.jpg']['exists'] is False
    assert by_name['profile.jpg']['path'] == os.path.abspath(site / 'profile.jpg')


def test_check_files_follows_config(make_config, site):
    report = files.check_files(make_config(resume_file='cv.pdf'))
    assert report[1] == {'file': 'cv.pdf', 'exists': False,
                         'path': os.path.abspath(site / 'cv.pdf')}
