"""
Tests for handler implementations.
"""

import pytest
from unittest.mock import patch
import sys
import os

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import make_response
from handlers.api_handler import APIHandler
from handlers.web_handler import WebPageHandler, split_fragments
from handlers.search_handler import SearchHandler
from handlers.release_handler import ReleaseHandler
from models.check_result import CheckResult

MODELS_URL = 'https://api.anthropic.com/v1/models'


class TestAPIHandler:
    """Tests for the models catalog handler."""

    def make_handler(self, api_key='test-key'):
        config = {'source_id': 'anthropic_api', 'data_url': MODELS_URL}
        return APIHandler(config, api_key=api_key)

    def test_get_method_name(self):
        assert self.make_handler().get_method_name() == 'api'

    @patch('handlers.base_handler.requests.get')
    def test_no_api_key_skips_network(self, mock_get):
        handler = self.make_handler(api_key=None)

        result = handler.fetch_and_classify()

        assert result == CheckResult.not_found()
        mock_get.assert_not_called()

    @patch('handlers.base_handler.requests.get')
    def test_match_on_model_id(self, mock_get):
        mock_get.return_value = make_response(json_data={'data': [
            {'id': 'claude-sonnet-4-20250514', 'display_name': 'Claude Sonnet 4'},
            {'id': 'claude-sonnet-5-preview', 'display_name': 'Claude Sonnet 5'},
        ]})

        result = self.make_handler().fetch_and_classify()

        assert result == CheckResult(found=True, model='claude-sonnet-5-preview', source=MODELS_URL)
        headers = mock_get.call_args.kwargs['headers']
        assert headers['x-api-key'] == 'test-key'
        assert headers['anthropic-version'] == '2023-06-01'

    @patch('handlers.base_handler.requests.get')
    def test_match_on_display_name_only(self, mock_get):
        mock_get.return_value = make_response(json_data={'data': [
            {'id': 'model-x', 'display_name': 'Claude-Sonnet-5'},
        ]})

        result = self.make_handler().fetch_and_classify()

        assert result.found is True
        assert result.model == 'model-x'

    @patch('handlers.base_handler.requests.get')
    def test_missing_fields_are_not_fatal(self, mock_get):
        mock_get.return_value = make_response(json_data={'data': [{}, {'id': None}]})

        result = self.make_handler().fetch_and_classify()

        assert result == CheckResult.not_found()

    @patch('handlers.base_handler.requests.get')
    def test_etag_replay_on_304(self, mock_get):
        mock_get.side_effect = [
            make_response(
                json_data={'data': [{'id': 'claude-sonnet-5', 'display_name': ''}]},
                headers={'ETag': '"v1"'},
            ),
            make_response(status_code=304),
        ]
        handler = self.make_handler()

        first = handler.fetch_and_classify()
        second = handler.fetch_and_classify()

        assert first.found is True
        assert second == first
        second_headers = mock_get.call_args_list[1].kwargs['headers']
        assert second_headers['If-None-Match'] == '"v1"'

    @patch('handlers.base_handler.requests.get')
    def test_error_status_is_soft_failure(self, mock_get):
        mock_get.return_value = make_response(status_code=500)

        result = self.make_handler().fetch_and_classify()

        assert result == CheckResult.not_found()

    @patch('handlers.base_handler.requests.get')
    def test_transport_error_is_soft_failure(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("boom")

        result = self.make_handler().fetch_and_classify()

        assert result == CheckResult.not_found()


class TestWebPageHandler:
    """Tests for the web page handler."""

    def make_handler(self, urls=None):
        config = {'source_id': 'anthropic_website', 'urls': urls or ['https://example.com/news']}
        return WebPageHandler(config)

    def test_get_method_name(self):
        assert self.make_handler().get_method_name() == 'web'

    def test_split_fragments(self):
        html = '<h1>Hello&nbsp;world</h1><p> x </p>'
        assert split_fragments(html) == ['h1', 'Hello world', '/h1', 'p', 'x', '/p']

    @patch('handlers.base_handler.requests.get')
    def test_fragment_of_150_chars_is_reported(self, mock_get):
        fragment = ('Introducing claude-sonnet-5 ' + 'x' * 200)[:150]
        mock_get.return_value = make_response(text=f'<p>{fragment}</p>')

        result = self.make_handler().fetch_and_classify()

        assert len(fragment) == 150
        assert result.found is True
        assert result.source == 'https://example.com/news'
        assert result.model == 'sonnet-5'

    @patch('handlers.base_handler.requests.get')
    def test_fragment_of_250_chars_is_skipped(self, mock_get):
        fragment = ('Introducing claude-sonnet-5 ' + 'x' * 300)[:250]
        mock_get.return_value = make_response(text=f'<p>{fragment}</p>')

        result = self.make_handler().fetch_and_classify()

        assert len(fragment) == 250
        assert result == CheckResult.not_found()

    @patch('handlers.base_handler.requests.get')
    def test_failed_page_does_not_stop_later_pages(self, mock_get):
        mock_get.side_effect = [
            requests.exceptions.Timeout("slow"),
            make_response(status_code=404),
            make_response(text='<li>Introducing claude-sonnet-5</li>'),
        ]
        handler = self.make_handler(urls=['https://a.test', 'https://b.test', 'https://c.test'])

        result = handler.fetch_and_classify()

        assert result.found is True
        assert result.source == 'https://c.test'

    @patch('handlers.base_handler.requests.get')
    def test_first_matching_page_wins(self, mock_get):
        mock_get.return_value = make_response(text='<b>Sonnet-5</b>')
        handler = self.make_handler(urls=['https://a.test', 'https://b.test'])

        result = handler.fetch_and_classify()

        assert result.source == 'https://a.test'
        assert mock_get.call_count == 1


class TestSearchHandler:
    """Tests for the discussion search handler."""

    def make_handler(self):
        return SearchHandler({'source_id': 'hacker_news', 'query': 'anthropic claude'})

    def test_get_method_name(self):
        assert self.make_handler().get_method_name() == 'search'

    @patch('handlers.base_handler.requests.get')
    def test_title_match_builds_permalink(self, mock_get):
        mock_get.return_value = make_response(json_data={'hits': [
            {'title': 'Claude 3.5 Sonnet is great', 'objectID': '1'},
            {'title': 'Ask HN: I gave Claude 5 tasks overnight', 'objectID': '2'},
            {'title': 'Anthropic releases claude-sonnet-5', 'objectID': '42'},
        ]})

        result = self.make_handler().fetch_and_classify()

        assert result.found is True
        assert result.source == 'https://news.ycombinator.com/item?id=42'
        params = mock_get.call_args.kwargs['params']
        assert params['query'] == 'anthropic claude'
        assert params['tags'] == 'story'

    @patch('handlers.base_handler.requests.get')
    def test_only_title_is_inspected(self, mock_get):
        mock_get.return_value = make_response(json_data={'hits': [
            {'title': 'Anthropic news', 'url': 'https://x.test/claude-sonnet-5', 'objectID': '7'},
        ]})

        result = self.make_handler().fetch_and_classify()

        assert result == CheckResult.not_found()

    @patch('handlers.base_handler.requests.get')
    def test_error_status_is_soft_failure(self, mock_get):
        mock_get.return_value = make_response(status_code=503)

        assert self.make_handler().fetch_and_classify() == CheckResult.not_found()


class TestReleaseHandler:
    """Tests for the GitHub release feed handler."""

    def make_handler(self, repos=None):
        return ReleaseHandler({'source_id': 'github_sdk', 'repos': repos or ['acme/sdk']})

    def test_get_method_name(self):
        assert self.make_handler().get_method_name() == 'releases'

    @patch('handlers.base_handler.requests.get')
    def test_release_match(self, mock_get):
        mock_get.return_value = make_response(json_data=[
            {'tag_name': 'v1.2.0', 'name': 'v1.2.0', 'body': 'Add claude-sonnet-5 model',
             'html_url': 'https://github.com/acme/sdk/releases/tag/v1.2.0'},
        ])

        result = self.make_handler().fetch_and_classify()

        assert result.found is True
        assert result.source == 'https://github.com/acme/sdk/releases/tag/v1.2.0'
        assert mock_get.call_count == 1

    @patch('handlers.base_handler.requests.get')
    def test_commit_match_when_no_release_matches(self, mock_get):
        mock_get.side_effect = [
            make_response(json_data=[{'tag_name': 'v1.1.0', 'name': None, 'body': None}]),
            make_response(json_data=[
                {'commit': {'message': 'chore: bump deps'}, 'html_url': 'https://github.com/acme/sdk/commit/a'},
                {'commit': {'message': 'feat: add sonnet-5'}, 'html_url': 'https://github.com/acme/sdk/commit/b'},
            ]),
        ]

        result = self.make_handler().fetch_and_classify()

        assert result.found is True
        assert result.source == 'https://github.com/acme/sdk/commit/b'

    @patch('handlers.base_handler.requests.get')
    def test_release_url_fallback(self, mock_get):
        mock_get.return_value = make_response(json_data=[{'tag_name': 'sonnet-5', 'name': '', 'body': ''}])

        result = self.make_handler().fetch_and_classify()

        assert result.source == 'https://github.com/acme/sdk/releases'

    @patch('handlers.base_handler.requests.get')
    def test_failing_repo_is_skipped(self, mock_get):
        mock_get.side_effect = [
            requests.exceptions.ConnectionError("down"),
            make_response(json_data=[{'tag_name': 'v2', 'name': 'Claude-5', 'body': '',
                                      'html_url': 'https://github.com/acme/other/releases/tag/v2'}]),
        ]
        handler = self.make_handler(repos=['acme/sdk', 'acme/other'])

        result = handler.fetch_and_classify()

        assert result.source == 'https://github.com/acme/other/releases/tag/v2'

    @patch('handlers.base_handler.requests.get')
    def test_malformed_repo_payload_is_skipped(self, mock_get):
        mock_get.side_effect = [
            make_response(json_data=[None]),
            make_response(json_data=[{'tag_name': 'claude-sonnet-5', 'name': '', 'body': '',
                                      'html_url': 'https://github.com/acme/other/releases/tag/v3'}]),
        ]
        handler = self.make_handler(repos=['acme/sdk', 'acme/other'])

        result = handler.fetch_and_classify()

        assert result.source == 'https://github.com/acme/other/releases/tag/v3'
        assert mock_get.call_count == 2

    @patch('handlers.base_handler.requests.get')
    def test_nothing_found(self, mock_get):
        mock_get.side_effect = [
            make_response(json_data=[]),
            make_response(json_data=[]),
        ]

        assert self.make_handler().fetch_and_classify() == CheckResult.not_found()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
