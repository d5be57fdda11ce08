"""
Tests for the processing step.
"""
import json
from unittest.mock import patch

import pytest

from functions import process_data
from functions.process_data import (
    count_characters,
    count_words,
    handler,
    report_processing_time,
    simulate_processing_time,
)


@pytest.mark.unit
class TestProcessDataHandler:
    """Test suite for the process-data function."""

    def test_process_greeting(self, lambda_context, no_processing_delay):
        """Test processing greeting data from the previous step."""
        event = {
            'body': {
                'greeting': 'Hello, World!',
                'timestamp': 'test-timestamp-123',
                'step': 'hello-world',
                'processed': True,
            }
        }

        result = handler(event, lambda_context)

        assert result['statusCode'] == 200
        body = result['body']
        assert body['original_greeting'] == 'Hello, World!'
        assert body['processed_at'] == 'test-timestamp-123'
        assert body['word_count'] == 2
        assert body['character_count'] == 13
        assert body['step'] == 'process-data'
        assert body['status'] == 'completed'
        assert isinstance(body['processing_time'], float)
        assert 0.5 <= body['processing_time'] < 2.0

    def test_partial_body(self, lambda_context, no_processing_delay):
        """Test missing timestamp defaults to an empty string."""
        result = handler({'body': {'greeting': 'Hi there'}}, lambda_context)

        assert result['body']['original_greeting'] == 'Hi there'
        assert result['body']['processed_at'] == ''
        assert result['body']['word_count'] == 2
        assert result['body']['character_count'] == 8

    def test_integration_payload(self, lambda_context, no_processing_delay):
        result = handler({'body': {'greeting': 'Hello, Integration Test!'}}, lambda_context)

        assert result['body']['word_count'] == 3
        assert result['body']['character_count'] == 24

    @pytest.mark.parametrize('event', [
        {},
        {'body': None},
        {'body': 'not an object'},
        {'body': {}},
        {'body': {'greeting': None}},
        {'body': {'greeting': 12345}},
        'invalid json',
        None,
    ])
    def test_missing_greeting(self, lambda_context, no_processing_delay, event):
        """Test an absent greeting is processed as an empty string."""
        result = handler(event, lambda_context)

        body = result['body']
        assert body['original_greeting'] == ''
        assert body['processed_at'] == ''
        assert body['word_count'] == 1
        assert body['character_count'] == 0
        assert body['status'] == 'completed'

    def test_sleeps_for_processing_time(self, lambda_context, no_processing_delay):
        """Test the step waits for the drawn processing time."""
        with patch.object(process_data, 'simulate_processing_time', return_value=1.234567):
            result = handler({'body': {'greeting': 'Hi'}}, lambda_context)

        no_processing_delay.assert_called_once_with(1.234567)
        assert result['body']['processing_time'] == 1.23

    def test_processing_time_never_reported_as_upper_bound(self, lambda_context, no_processing_delay):
        with patch.object(process_data, 'simulate_processing_time', return_value=1.9999):
            result = handler({'body': {'greeting': 'Hi'}}, lambda_context)

        assert result['body']['processing_time'] == 1.99

    def test_lone_surrogate_in_greeting(self, lambda_context, no_processing_delay):
        """Test a greeting with an unpaired surrogate escape is still counted."""
        event = json.loads('{"body": {"greeting": "Hi \\ud83d"}}')

        result = handler(event, lambda_context)

        assert result['body']['original_greeting'] == 'Hi \ud83d'
        assert result['body']['word_count'] == 2
        assert result['body']['character_count'] == 4

    def test_timestamp_passed_through(self, lambda_context, no_processing_delay):
        result = handler({'body': {'greeting': 'Hi', 'timestamp': 'abc-123'}}, lambda_context)
        assert result['body']['processed_at'] == 'abc-123'


@pytest.mark.unit
class TestCounting:
    """Test suite for the word and character counts."""

    @pytest.mark.parametrize('text,expected', [
        ('Hello, World!', 2),
        ('Hi, Alice!', 2),
        ('Good morning, Bob!', 3),
        ('single', 1),
        ('', 1),
        ('two  spaces', 3),
        (' leading', 2),
    ])
    def test_count_words(self, text, expected):
        assert count_words(text) == expected

    @pytest.mark.parametrize('text,expected', [
        ('', 0),
        ('Hi, Alice!', 10),
        ('Hello, World!', 13),
        ('Zo\u00eb', 3),
        ('👋', 2),
        ('Hi 👋!', 6),
        ('Hi \ud83d', 4),
    ])
    def test_count_characters_in_utf16_units(self, text, expected):
        assert count_characters(text) == expected


@pytest.mark.unit
class TestProcessingTime:
    """Test suite for the simulated processing time."""

    def test_simulated_time_in_range(self):
        for _ in range(1000):
            value = simulate_processing_time()
            assert 0.5 <= value < 2.0

    @pytest.mark.parametrize('random_value,expected', [
        (0.0, 0.5),
        (0.5, 1.25),
        (0.999999, 2.0 - 1.5 * 0.000001),
    ])
    def test_simulated_time_scaling(self, random_value, expected):
        with patch('functions.process_data.random.random', return_value=random_value):
            assert simulate_processing_time() == pytest.approx(expected)

    @pytest.mark.parametrize('seconds,expected', [
        (0.5, 0.5),
        (0.504, 0.5),
        (1.2371, 1.24),
        (1.99, 1.99),
        (1.996, 1.99),
    ])
    def test_report_processing_time(self, seconds, expected):
        assert report_processing_time(seconds) == expected

    def test_reported_time_in_range(self):
        for _ in range(1000):
            reported = report_processing_time(simulate_processing_time())
            assert 0.5 <= reported < 2.0
            assert round(reported, 2) == reported
