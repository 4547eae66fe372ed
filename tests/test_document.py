import unittest

from seating_designer.document import (
    add_element,
    default_document,
    find_element,
    layout_stats,
    move_element,
    new_seating_area,
    new_stage,
    remove_element,
    set_floor_label,
    set_seat_override,
    update_seating_area,
    update_stage,
)
from seating_designer.models import DesignDocument, ElementKind, SeatType

from tests.helpers import sample_document, sequential_ids


class TestNewElements(unittest.TestCase):
    def test_new_stage_defaults(self):
        doc = DesignDocument(floor_label="Balcony")
        stage = new_stage(doc, id_factory=sequential_ids())
        self.assertEqual((stage.id, stage.name), ("stage-101", "Balcony"))
        self.assertEqual((stage.x, stage.y, stage.width, stage.height), (100, 100, 120, 50))

    def test_new_area_defaults(self):
        doc = DesignDocument(floor_label="")
        area = new_seating_area(doc, 40, 60, id_factory=sequential_ids())
        self.assertEqual((area.rows, area.columns), (5, 8))
        self.assertEqual((area.width, area.height), (255, 140))
        self.assertEqual((area.x, area.y), (40, 60))
        self.assertEqual(area.name, "Area 1")
        self.assertEqual((area.seat_price, area.vip_price, area.seat_type), (50, 100, SeatType.regular))

    def test_empty_floor_label_stage_name(self):
        self.assertEqual(new_stage(DesignDocument()).name, "Stage")

    def test_default_document(self):
        doc = default_document()
        self.assertEqual((doc.canvas_width, doc.canvas_height, doc.floor_label), (800, 600, "F1"))
        self.assertEqual(len(doc.stages), 1)
        self.assertEqual(doc.seating_areas, ())


class TestDocumentEdits(unittest.TestCase):
    def test_add_and_remove(self):
        doc = sample_document()
        stage = new_stage(doc, 1, 2, id_factory=sequential_ids())
        added = add_element(doc, stage)
        self.assertEqual(len(added.stages), 2)
        self.assertEqual(len(doc.stages), 1)
        removed = remove_element(added, stage.id, ElementKind.stage)
        self.assertEqual([s.id for s in removed.stages], ["stage-1"])

    def test_remove_missing_is_noop(self):
        doc = sample_document()
        self.assertIs(remove_element(doc, "nope", ElementKind.seating_area), doc)

    def test_move(self):
        doc = move_element(sample_document(), "a", ElementKind.seating_area, 10, 20)
        area = find_element(doc, "a", ElementKind.seating_area)
        self.assertEqual((area.x, area.y), (10, 20))

    def test_grid_edit_recomputes_size(self):
        doc = update_seating_area(sample_document(), "a", rows="3", columns=4)
        area = find_element(doc, "a", ElementKind.seating_area)
        self.assertEqual((area.rows, area.columns), (3, 4))
        self.assertEqual((area.width, area.height), (135, 90))

    def test_grid_edit_normalizes_input(self):
        doc = update_seating_area(sample_document(), "a", rows="abc", columns=99)
        area = find_element(doc, "a", ElementKind.seating_area)
        self.assertEqual((area.rows, area.columns), (1, 20))
        doc = update_seating_area(doc, "a", rows=0, columns=-3)
        area = find_element(doc, "a", ElementKind.seating_area)
        self.assertEqual((area.rows, area.columns), (1, 1))

    def test_price_and_type_edits(self):
        doc = update_seating_area(sample_document(), "a", seat_price="12.5", vip_price="x", seat_type="vip")
        area = find_element(doc, "a", ElementKind.seating_area)
        self.assertEqual((area.seat_price, area.vip_price, area.seat_type), (12.5, 0.0, SeatType.vip))

    def test_unknown_seat_type_ignored(self):
        doc = sample_document()
        with self.assertLogs("seating_designer.document", level="WARNING"):
            updated = update_seating_area(doc, "a", seat_type="premium")
        self.assertIs(updated, doc)

    def test_stage_panel_edit(self):
        doc = update_stage(sample_document(), "stage-1", width="", height=2)
        stage = find_element(doc, "stage-1", ElementKind.stage)
        self.assertEqual((stage.width, stage.height), (100, 5))

    def test_overrides_survive_grid_shrink(self):
        doc = set_seat_override(sample_document(), "a", 4, 7, SeatType.vip, 100)
        doc = update_seating_area(doc, "a", rows=2)
        area = find_element(doc, "a", ElementKind.seating_area)
        self.assertIn((4, 7), area.individual_seats)

    def test_floor_label_cascade(self):
        doc = sample_document()
        renamed = set_floor_label(doc, "Upper", selected_id="stage-1", selected_kind=ElementKind.stage)
        self.assertEqual(renamed.floor_label, "Upper")
        self.assertEqual(renamed.stages[0].name, "Upper")
        self.assertEqual(renamed.seating_areas[0].name, "Main")

    def test_floor_label_without_selection(self):
        renamed = set_floor_label(sample_document(), "Upper")
        self.assertEqual(renamed.floor_label, "Upper")
        self.assertEqual(renamed.stages[0].name, "F1")
        self.assertEqual([a.name for a in renamed.seating_areas], ["Main", "Side"])


class TestLayoutStats(unittest.TestCase):
    def test_counts(self):
        stats = layout_stats(sample_document())
        self.assertEqual((stats.stages, stats.seating_areas, stats.total_seats), (1, 2, 49))
        self.assertEqual(stats.overlapping_areas, ())


if __name__ == "__main__":
    unittest.main()
