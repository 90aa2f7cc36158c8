"""Flask CLI command tests."""

import os

from market.models import User
from market.extensions import db
from market.services import sales_service


def test_create_and_list_users(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['users', 'create', '--username', 'alice', '--email', 'a@x.com', '--password', 'pw1'])
    assert result.exit_code == 0, result.output
    assert 'Created user alice' in result.output
    assert db.session.get(User, 'alice') is not None

    result = runner.invoke(args=['users', 'list'])
    assert result.exit_code == 0
    assert 'alice' in result.output
    assert 'a@x.com' in result.output


def test_create_duplicate_user_fails(app):
    runner = app.test_cli_runner()
    runner.invoke(args=['users', 'create', '--username', 'alice', '--email', 'a@x.com', '--password', 'pw1'])

    result = runner.invoke(args=['users', 'create', '--username', 'alice', '--email', 'b@x.com', '--password', 'pw2'])
    assert result.exit_code != 0
    assert 'Username already exists' in result.output


def test_list_users_when_empty(app):
    result = app.test_cli_runner().invoke(args=['users', 'list'])
    assert 'No users found.' in result.output


def test_next_id_does_not_consume(app):
    runner = app.test_cli_runner()

    assert runner.invoke(args=['sales', 'next-id']).output.strip() == '1'
    assert runner.invoke(args=['sales', 'next-id']).output.strip() == '1'

    sales_service.record_sale(items=[{'price': 1}])
    assert runner.invoke(args=['sales', 'next-id']).output.strip() == '2'


def test_init_db_creates_folders(app):
    result = app.test_cli_runner().invoke(args=['system', 'init-db'])
    assert result.exit_code == 0, result.output
    assert os.path.isdir(app.config['UPLOAD_FOLDER'])
    assert os.path.isdir(app.config['PAYMENT_PROOF_FOLDER'])
