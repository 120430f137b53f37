import os
import sys
import unittest
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import WeightConverter


class WeightConverterTest(unittest.TestCase):
    def test_kg_to_lb(self) -> None:
        self.assertAlmostEqual(WeightConverter.kg_to_lb(100), 220.462)
        self.assertAlmostEqual(WeightConverter.lb_to_kg(220.462), 100)

    def test_format_lb(self) -> None:
        self.assertEqual(WeightConverter.format_lb(100), "220.5")
        self.assertEqual(WeightConverter.format_lb(None), "0.0")
        self.assertEqual(WeightConverter.format_lb(0, empty="—"), "—")
        self.assertEqual(WeightConverter.format_lb(None, empty="—"), "—")
        self.assertEqual(WeightConverter.format_lb(20, empty="—"), "44.1")


if __name__ == "__main__":
    unittest.main()
