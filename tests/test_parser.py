"""Tests for the NDBC realtime2 record tokenizer."""
import math
from datetime import datetime, timezone

import pytest

from swellsplit.data_sources.parser import (
    RecordError,
    parse_directional_record,
    parse_number,
    parse_spectral_record,
    parse_timestamp,
    record_pairs,
    tokenize_pairs,
)
from swellsplit.waves.spectra import DirectionalRecord, SpectralRecord

SPEC_LINE = '2024 05 01 12 40 0.110 0.000 (0.033) 0.154 (0.038) 1.250 (0.043) 0.870 (0.048)'
SWDIR_LINE = '2024 05 01 12 40 263.0 (0.033) 270.0 (0.038) MM (0.043) 255.0 (0.048)'


class TestParseNumber:
    """Tests for single token parsing."""

    @pytest.mark.parametrize("token, expected", [
        ('0.154', 0.154),
        ('12', 12.0),
        ('-3.5', -3.5),
    ])
    def test_numbers(self, token, expected):
        assert parse_number(token) == expected

    @pytest.mark.parametrize("token", ['MM', '999', '999.00', '9999.0', 'nan', '1.2.3', '', None])
    def test_missing_values(self, token):
        assert parse_number(token) is None


class TestParseTimestamp:
    """Tests for the leading date fields."""

    def test_four_digit_year(self):
        ts = parse_timestamp(['2024', '05', '01', '12', '40'])
        assert ts == datetime(2024, 5, 1, 12, 40, tzinfo=timezone.utc)

    def test_two_digit_years(self):
        assert parse_timestamp(['24', '05', '01', '12', '40']).year == 2024
        assert parse_timestamp(['98', '05', '01', '12', '40']).year == 1998

    @pytest.mark.parametrize("fields", [
        ['2024', '05', '01', '12'],
        ['2024', '13', '01', '12', '40'],
        ['YYYY', '05', '01', '12', '40'],
    ])
    def test_invalid(self, fields):
        assert parse_timestamp(fields) is None


class TestTokenizePairs:
    """Tests for value(frequency) tokenization."""

    def test_spaced_and_unspaced_pairs(self):
        spaced = tokenize_pairs('0.12 (0.033) 0.50 (0.038)')
        unspaced = tokenize_pairs('0.12(0.033) 0.50(0.038)')

        assert spaced == [(0.12, 0.033), (0.5, 0.038)]
        assert unspaced == spaced

    def test_unreadable_value_keeps_slot(self):
        assert tokenize_pairs('MM (0.033) 1.2.3 (0.038)') == [(None, 0.033), (None, 0.038)]

    def test_unreadable_frequency_drops_pair(self):
        assert tokenize_pairs('0.12 (MM) 0.50 (0.038) 0.7 (0.0)') == [(0.5, 0.038)]

    def test_no_pairs(self):
        assert tokenize_pairs('0.12 0.50') == []


class TestParseSpectralRecord:
    """Tests for .data_spec lines."""

    def test_parses_line(self):
        record = parse_spectral_record(SPEC_LINE)

        assert isinstance(record, SpectralRecord)
        assert record.timestamp == datetime(2024, 5, 1, 12, 40, tzinfo=timezone.utc)
        assert record.separation_frequency == 0.11
        assert [p.frequency for p in record.points] == [0.033, 0.038, 0.043, 0.048]
        assert [p.energy for p in record.points] == [0.0, 0.154, 1.25, 0.87]
        assert all(p.direction is None for p in record.points)

    def test_missing_separation_frequency(self):
        record = parse_spectral_record('2024 05 01 12 40 MM 0.5 (0.05)')
        assert record.separation_frequency is None
        assert len(record.points) == 1

    def test_unreadable_energy_drops_bin(self):
        record = parse_spectral_record('2024 05 01 12 40 0.1 0.5 (0.05) MM (0.06) 999.00 (0.07) 0.2 (0.08)')
        assert [p.frequency for p in record.points] == [0.05, 0.08]
        assert record.missing_frequencies == (0.06, 0.07)

    def test_unreadable_energy_keeps_its_slot_in_pairs(self):
        record = parse_spectral_record('2024 05 01 12 40 0.1 0.5 (0.05) MM (0.06) 0.2 (0.07)')

        assert [p.frequency for p in record.points] == [0.05, 0.07]
        assert record_pairs(record) == [(0.5, 0.05), (None, 0.06), (0.2, 0.07)]

    def test_out_of_order_bin_is_dropped(self):
        record = parse_spectral_record('2024 05 01 12 40 0.1 0.5 (0.05) 0.4 (0.07) 0.3 (0.06)')
        assert [p.frequency for p in record.points] == [0.05, 0.07]

    @pytest.mark.parametrize("line, reason", [
        (None, 'missing leading fields'),
        ('', 'missing leading fields'),
        ('2024 05 01', 'missing leading fields'),
        ('YYYY MM DD hh mm 0.1 0.5 (0.05)', 'invalid timestamp'),
        ('2024 05 01 12 40 0.1', 'no value(frequency) tokens'),
        ('2024 05 01 12 40 0.1 MM (0.05)', 'no value(frequency) tokens'),
    ])
    def test_errors(self, line, reason):
        result = parse_spectral_record(line)
        assert isinstance(result, RecordError)
        assert result.reason == reason
        assert result.line == line


class TestParseDirectionalRecord:
    """Tests for .swdir/.swdir2/.swr1/.swr2 lines."""

    def test_keeps_missing_slots_as_nan(self):
        record = parse_directional_record(SWDIR_LINE)

        assert isinstance(record, DirectionalRecord)
        assert len(record) == 4
        assert record.frequencies == (0.033, 0.038, 0.043, 0.048)
        assert record.values[:2] == (263.0, 270.0)
        assert math.isnan(record.values[2])
        assert record.values[3] == 255.0

    def test_first_value_is_not_a_separation_frequency(self):
        record = parse_directional_record('2024 05 01 12 40 0.80(0.033)')
        assert record.values == (0.8,)

    def test_errors(self):
        assert parse_directional_record('2024 05 01 12 40').reason == 'no value(frequency) tokens'
        assert parse_directional_record('2024 99 01 12 40 1.0 (0.1)').reason == 'invalid timestamp'


class TestRecordPairs:
    """Tests for record_pairs."""

    def test_spectral(self):
        assert record_pairs(parse_spectral_record(SPEC_LINE))[:2] == [(0.0, 0.033), (0.154, 0.038)]

    def test_directional(self):
        pairs = record_pairs(parse_directional_record(SWDIR_LINE))
        assert pairs[0] == (263.0, 0.033)
        assert len(pairs) == 4
