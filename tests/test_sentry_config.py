"""
Tests for Sentry initialisation gating.
"""

from flask import Flask

import sentry_config
from sentry_config import _sample_rate, init_sentry


def make_app(environment):
    app = Flask(__name__)
    app.config['ENVIRONMENT'] = environment
    return app


class TestInitSentry:

    def test_disabled_without_dsn(self, monkeypatch, mocker):
        monkeypatch.delenv('SENTRY_DSN', raising=False)
        init = mocker.patch('sentry_config.sentry_sdk.init')
        assert init_sentry(make_app('production')) is False
        init.assert_not_called()

    def test_disabled_outside_production(self, monkeypatch, mocker):
        monkeypatch.setenv('SENTRY_DSN', 'https://key@sentry.example.com/1')
        init = mocker.patch('sentry_config.sentry_sdk.init')
        assert init_sentry(make_app('development')) is False
        init.assert_not_called()

    def test_enabled_in_production(self, monkeypatch, mocker):
        monkeypatch.setenv('SENTRY_DSN', 'https://key@sentry.example.com/1')
        monkeypatch.setenv('SENTRY_TRACES_SAMPLE_RATE', '0.5')
        monkeypatch.setenv('GIT_SHA', 'abc123')
        init = mocker.patch('sentry_config.sentry_sdk.init')

        assert init_sentry(make_app('production')) is True

        kwargs = init.call_args.kwargs
        assert kwargs['environment'] == 'production'
        assert kwargs['release'] == 'abc123'
        assert kwargs['traces_sample_rate'] == 0.5
        assert kwargs['send_default_pii'] is False

    def test_init_failure_is_reported_not_raised(self, monkeypatch, mocker):
        monkeypatch.setenv('SENTRY_DSN', 'not-a-dsn')
        mocker.patch.object(sentry_config.sentry_sdk, 'init', side_effect=Exception('bad dsn'))
        assert init_sentry(make_app('production')) is False


class TestSampleRate:

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv('SENTRY_TRACES_SAMPLE_RATE', raising=False)
        assert _sample_rate('SENTRY_TRACES_SAMPLE_RATE', 0.2) == 0.2

    def test_bad_values_fall_back(self, monkeypatch):
        for raw in ('lots', '1.5', '-0.1'):
            monkeypatch.setenv('SENTRY_TRACES_SAMPLE_RATE', raw)
            assert _sample_rate('SENTRY_TRACES_SAMPLE_RATE', 0.2) == 0.2

    def test_valid_value(self, monkeypatch):
        monkeypatch.setenv('SENTRY_TRACES_SAMPLE_RATE', '0.75')
        assert _sample_rate('SENTRY_TRACES_SAMPLE_RATE', 0.2) == 0.75
