import unittest

from seating_designer.document import set_seat_override
from seating_designer.export import seat_code, seat_records, seat_statistics
from seating_designer.models import SeatType

from tests.helpers import sample_document


class TestSeatRecords(unittest.TestCase):
    def test_seat_code_strips_punctuation(self):
        self.assertEqual(seat_code("F-1 (north)", "Main Floor!", 2, 3), "F1north-MainFloor-R2-C3")

    def test_records_are_one_based_and_honour_overrides(self):
        doc = set_seat_override(sample_document(), "a", 0, 0, SeatType.deactivated, 0)
        doc = set_seat_override(doc, "a", 0, 1, SeatType.vip, 100)
        records = list(seat_records(doc))
        self.assertEqual(len(records), 49)

        first = records[0]
        self.assertEqual((first.id, first.row, first.column), ("a-R1-C1", 1, 1))
        self.assertEqual(first.seat_code, "F1-Main-R1-C1")
        self.assertEqual((first.seat_type, first.status, first.price), (SeatType.deactivated, "inactive", 0))
        self.assertEqual((first.x, first.y), (122.5, 220))

        second = records[1]
        self.assertEqual((second.seat_type, second.status, second.price), (SeatType.vip, "active", 100))

    def test_statistics(self):
        doc = set_seat_override(sample_document(), "a", 0, 0, SeatType.deactivated, 0)
        doc = set_seat_override(doc, "b", 1, 1, SeatType.vip, 80)
        stats = seat_statistics(doc)
        self.assertEqual((stats.total, stats.active, stats.inactive), (49, 48, 1))
        self.assertEqual((stats.vip, stats.regular), (1, 47))


if __name__ == "__main__":
    unittest.main()
