import os
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle

from panelpack import CirclePacker, PackingInputs
from panelpack.visualization import plot_packing, save_packing_plot


class TestPlotPacking(unittest.TestCase):
    def setUp(self):
        self.inputs = PackingInputs(diameter=33, clearance=1, width=600, height=120)
        self.packer = CirclePacker(self.inputs)

    def tearDown(self):
        plt.close("all")

    def _labels(self, ax):
        return [t.get_text() for t in ax.texts]

    def test_draws_every_circle(self):
        result = self.packer.pack_triangular(60)
        ax = plot_packing(result, self.inputs)
        circles = [p for p in ax.patches if isinstance(p, Circle)]
        rectangles = [p for p in ax.patches if isinstance(p, Rectangle)]
        self.assertEqual(len(circles), result.count)
        self.assertEqual(len(rectangles), 2)
        self.assertEqual(circles[0].get_radius(), 16.5)

    def test_origin_is_top_left(self):
        ax = plot_packing(self.packer.pack_rectangular(), self.inputs)
        bottom, top = ax.get_ylim()
        self.assertGreater(bottom, top)

    def test_tight_layout_labels_bounding_box(self):
        result = self.packer.pack_triangular(60)
        labels = self._labels(plot_packing(result, self.inputs))
        self.assertIn("600 mm", labels)
        self.assertIn("120 mm", labels)
        self.assertIn("594.0 mm", labels)

    def test_spread_layout_only_labels_panel(self):
        result = self.packer.pack_triangular(60, spread=True)
        labels = self._labels(plot_packing(result, self.inputs, unit="in"))
        self.assertIn("600 in", labels)
        self.assertNotIn("600.0 in", labels)

    def test_without_dimensions(self):
        ax = plot_packing(self.packer.optimize_angle(), self.inputs, show_dimensions=False)
        self.assertEqual(self._labels(ax), [])
        self.assertIn("64 circles", ax.get_title())

    def test_empty_result(self):
        inputs = PackingInputs(diameter=50, clearance=1, width=40, height=40)
        result = CirclePacker(inputs).pack_rectangular()
        ax = plot_packing(result, inputs)
        self.assertEqual([p for p in ax.patches if isinstance(p, Circle)], [])

    def test_save_to_file(self):
        result = self.packer.pack_rectangular(spread=True)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "layout.png")
            save_packing_plot(result, self.inputs, path)
            self.assertTrue(os.path.exists(path))
            self.assertGreater(os.path.getsize(path), 0)
        self.assertEqual(plt.get_fignums(), [])


if __name__ == '__main__':
    unittest.main()
