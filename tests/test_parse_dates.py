"""
Unit tests for date/time normalization and the day-of-week table.

Contract:
- '<DD/MM/YYYY> <HH:MM> - <HH:MM>' is returned verbatim, whitespace collapsed
- anything else gives three empty strings
- the day of week comes from the given date only (Sunday = א׳)
"""

import unittest

from bs4 import BeautifulSoup

from sailor.parse import day_of_week, parse_date_time


def _box(inner: str):
    soup = BeautifulSoup(f"<div class='yachts-box'>{inner}</div>", "html.parser")
    return soup.div


class TestParseDateTime(unittest.TestCase):
    def test_exact_label(self) -> None:
        box = _box('<div class="sail-time-date-label">27/10/2025 14:00 - 16:00</div>')
        self.assertEqual(parse_date_time(box), ("27/10/2025", "14:00", "16:00"))

    def test_label_split_over_lines_and_spans(self) -> None:
        box = _box(
            '<div class="sail-time-date-label">\n'
            "  <span>27/10/2025</span>\n"
            "  <span>14:00   -\n   16:00</span>\n"
            "</div>"
        )
        self.assertEqual(parse_date_time(box), ("27/10/2025", "14:00", "16:00"))

    def test_hyphen_without_spaces(self) -> None:
        box = _box('<div class="sail-time-date-label">31/10/2025 09:00-12:00</div>')
        self.assertEqual(parse_date_time(box), ("31/10/2025", "09:00", "12:00"))

    def test_missing_label_returns_empty(self) -> None:
        box = _box("<h2>הפלגה</h2>")
        self.assertEqual(parse_date_time(box), ("", "", ""))

    def test_non_matching_text_returns_empty(self) -> None:
        # single-digit day/hour does not match the fixed pattern
        box = _box('<div class="sail-time-date-label">7/10/2025 9:00 - 12:00</div>')
        self.assertEqual(parse_date_time(box), ("", "", ""))

    def test_non_ascii_digits_do_not_match(self) -> None:
        # Arabic-Indic digits are not accepted as date/time digits
        box = _box('<div class="sail-time-date-label">٢٧/١٠/٢٠٢٥ ١٤:٠٠ - ١٦:٠٠</div>')
        self.assertEqual(parse_date_time(box), ("", "", ""))

    def test_only_first_label_is_used(self) -> None:
        box = _box(
            '<div class="sail-time-date-label">בקרוב</div>'
            '<div class="sail-time-date-label">27/10/2025 14:00 - 16:00</div>'
        )
        self.assertEqual(parse_date_time(box), ("", "", ""))


class TestDayOfWeek(unittest.TestCase):
    def test_monday(self) -> None:
        self.assertEqual(day_of_week("27/10/2025"), "ב׳")

    def test_sunday_is_first_entry(self) -> None:
        self.assertEqual(day_of_week("02/11/2025"), "א׳")

    def test_saturday_is_last_entry(self) -> None:
        self.assertEqual(day_of_week("01/11/2025"), "ש׳")

    def test_month_is_one_based(self) -> None:
        # 01/01/2026 is a Thursday; an off-by-one month would land in February
        self.assertEqual(day_of_week("01/01/2026"), "ה׳")

    def test_empty_input(self) -> None:
        self.assertEqual(day_of_week(""), "")

    def test_out_of_range_day_rolls_over(self) -> None:
        # 31/02/2025 is 03/03/2025, a Monday
        self.assertEqual(day_of_week("31/02/2025"), "ב׳")
        # day 0 is the last day of the previous month (28/02/2025, a Friday)
        self.assertEqual(day_of_week("00/03/2025"), "ו׳")

    def test_out_of_range_month_rolls_over(self) -> None:
        # month 13 of 2025 is January 2026
        self.assertEqual(day_of_week("01/13/2025"), "ה׳")

    def test_malformed_input(self) -> None:
        self.assertEqual(day_of_week("27-10-2025"), "")
        self.assertEqual(day_of_week("aa/bb/cccc"), "")

    def test_repeatable(self) -> None:
        self.assertEqual(day_of_week("31/10/2025"), day_of_week("31/10/2025"))
        self.assertEqual(day_of_week("31/10/2025"), "ו׳")


if __name__ == "__main__":
    unittest.main()
