"""
Stored-file tests: naming, best-effort removal, and post-commit cleanup.
"""

import os
import re

from market.extensions import db
from market.services import file_service


def test_whitespace_is_collapsed_to_hyphens(app):
    name = file_service.build_stored_name('my  summer\tphoto.png')
    assert re.fullmatch(r'\d+-my-summer-photo\.png', name)


def test_proof_infix(app):
    name = file_service.build_stored_name('receipt.pdf', infix='proof-')
    assert re.fullmatch(r'\d+-proof-receipt\.pdf', name)


def test_names_cannot_escape_the_folder(app):
    name = file_service.build_stored_name('../../etc/passwd.png')
    assert '/' not in name
    assert '..' not in name
    assert re.fullmatch(r'\d+-etc_passwd\.png', name)


def test_unusable_name_falls_back_to_placeholder(app):
    name = file_service.build_stored_name('../..', infix='proof-')
    assert re.fullmatch(r'\d+-proof-upload', name)


def test_discard_missing_file_is_not_an_error(app, upload_folder):
    assert file_service.discard_file(upload_folder, 'nothing-here.png') is False
    assert file_service.discard_file(upload_folder, None) is False


def test_discard_failure_is_logged_not_raised(app, upload_folder, caplog):
    os.makedirs(os.path.join(upload_folder, 'a-directory.png'))

    assert file_service.discard_file(upload_folder, 'a-directory.png') is False
    assert 'Could not remove stored file' in caplog.text


def test_discard_after_commit_removes_on_commit(app, stored_image, upload_folder):
    name = stored_image('a.png')

    file_service.discard_after_commit(upload_folder, name)
    assert os.path.exists(os.path.join(upload_folder, name))

    db.session.commit()
    assert not os.path.exists(os.path.join(upload_folder, name))


def test_discard_after_commit_keeps_file_on_rollback(app, stored_image, upload_folder):
    name = stored_image('b.png')

    file_service.discard_after_commit(upload_folder, name)
    db.session.rollback()
    db.session.commit()

    assert os.path.exists(os.path.join(upload_folder, name))
