from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from easeviz_core.core.window_matrix import FullRewrite, ReplaceRect
from easeviz_plot.screen import create_screen


class ScreenTests(unittest.TestCase):
    def setUp(self) -> None:
        self.screen = create_screen(40, 30)
        base = self.screen.restore_cache()
        base[10, 10] = (0, 0, 0, 255)
        self.screen.commit_base(base)

    def test_base_commit_rewrites_full_frame(self) -> None:
        with mock.patch.object(self.screen.front, "submit_write_batch", wraps=self.screen.front.submit_write_batch) as submit:
            self.screen.commit_base(self.screen.restore_cache())
        (batch,), _ = submit.call_args
        self.assertIsInstance(batch.operations[0], FullRewrite)

    def test_overlay_uploads_changed_rect_only(self) -> None:
        staged = self.screen.restore_cache()
        staged[5, 7] = (1, 2, 3, 255)
        staged[8, 12] = (4, 5, 6, 255)
        with mock.patch.object(self.screen.front, "submit_write_batch", wraps=self.screen.front.submit_write_batch) as submit:
            self.assertIsNotNone(self.screen.commit_overlay(staged))
        (batch,), _ = submit.call_args
        op = batch.operations[0]
        self.assertIsInstance(op, ReplaceRect)
        self.assertEqual((op.x, op.y, op.width, op.height), (7, 5, 6, 4))
        np.testing.assert_array_equal(self.screen.front.read_numpy(), staged)

    def test_restoring_cache_clears_previous_overlay(self) -> None:
        staged = self.screen.restore_cache()
        staged[20:25, 3:9] = (9, 9, 9, 255)
        self.screen.commit_overlay(staged)
        self.screen.commit_overlay(self.screen.restore_cache())
        np.testing.assert_array_equal(self.screen.front.read_numpy(), self.screen.cache)

    def test_unchanged_overlay_is_not_presented(self) -> None:
        revision = self.screen.front.revision
        self.assertIsNone(self.screen.commit_overlay(self.screen.restore_cache()))
        self.assertEqual(self.screen.front.revision, revision)

    def test_wrong_shape_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.screen.commit_overlay(np.zeros((2, 2, 4), dtype=np.uint8))
        with self.assertRaises(ValueError):
            self.screen.commit_base(np.zeros((2, 2, 4), dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
