import math
import unittest
from dataclasses import fields

from pnl_sim.config.env import DriverConfig
from pnl_sim.projection.engine import project
from tests.fixtures import baseline, params

CFG = DriverConfig()


class TestProjection(unittest.TestCase):
    def test_identity_scenario_reproduces_baseline(self):
        b = baseline()
        m = project(b, params(revenue_growth=0, robotization_level=0, warehouse_utilization=82), CFG)
        self.assertEqual(m.revenue, b.revenue)
        self.assertEqual(m.cogs_rent, b.cogs_rent)
        self.assertEqual(m.cogs_personnel, b.cogs_personnel)
        self.assertAlmostEqual(m.total_cogs, 300.0)
        self.assertAlmostEqual(m.total_sga, 156.0)
        self.assertAlmostEqual(m.ebitda, 94.0)
        self.assertAlmostEqual(m.ebitda_margin, 100 * 94 / 550)
        self.assertEqual(m.capex_requirement, 0.0)
        self.assertEqual(m.depreciation, b.depreciation)
        self.assertEqual(m.interest, b.interest)

    def test_learning_curve_example(self):
        m = project(baseline(), params(revenue_growth=100, robotization_level=0, warehouse_utilization=82), CFG)
        self.assertAlmostEqual(m.revenue, 1100.0)
        self.assertAlmostEqual(m.cogs_personnel, 342.0, places=9)

    def test_learning_curve_is_capped(self):
        # 300% growth -> 0.15 uncapped, capped at 0.10
        m = project(baseline(), params(revenue_growth=300), CFG)
        self.assertAlmostEqual(m.cogs_personnel, 180.0 * 4.0 * 0.9)

    def test_robotization_lowers_personnel_and_raises_capex(self):
        levels = [6, 10, 30, 60, 100]
        runs = [project(baseline(), params(revenue_growth=50, robotization_level=lvl), CFG) for lvl in levels]
        for prev, nxt in zip(runs, runs[1:]):
            self.assertLess(nxt.cogs_personnel, prev.cogs_personnel)
            self.assertGreater(nxt.capex_requirement, prev.capex_requirement)
            self.assertGreater(nxt.depreciation, prev.depreciation)
            self.assertGreater(nxt.interest, prev.interest)

    def test_capex_depreciation_and_interest(self):
        m = project(baseline(), params(robotization_level=25), CFG)
        self.assertAlmostEqual(m.capex_requirement, 30.0)
        self.assertAlmostEqual(m.depreciation, 30.0 + 6.0)
        self.assertAlmostEqual(m.interest, 12.0 + 2.4)
        self.assertAlmostEqual(m.additional_debt, 15.0)
        at_floor = project(baseline(), params(robotization_level=5), CFG)
        self.assertEqual(at_floor.capex_requirement, 0.0)

    def test_utilization_inverse_to_rent(self):
        rents = [project(baseline(), params(revenue_growth=40, warehouse_utilization=u), CFG).cogs_rent
                 for u in (50, 70, 82, 95, 100)]
        for prev, nxt in zip(rents, rents[1:]):
            self.assertLess(nxt, prev)
        self.assertAlmostEqual(rents[2], 60.0 * 1.4)

    def test_sga_scale_effect(self):
        m = project(baseline(), params(revenue_growth=100), CFG)
        self.assertAlmostEqual(m.sga_management, 70.0 * 1.6)
        self.assertAlmostEqual(m.sga_it, 25.0 * 1.6)
        self.assertAlmostEqual(m.sga_other, 41.0 * 1.6)
        self.assertAlmostEqual(m.sga_marketing, 20.0 * 2.0)

    def test_roll_up_identities(self):
        for growth, robots, util in [(0, 0, 50), (35, 12, 82), (120, 55, 97), (400, 100, 100)]:
            m = project(baseline(), params(revenue_growth=growth, robotization_level=robots, warehouse_utilization=util), CFG)
            parts = m.cogs_personnel + m.cogs_rent + m.cogs_utilities + m.cogs_materials + m.cogs_fuel
            self.assertTrue(math.isclose(m.total_cogs, parts, rel_tol=1e-9))
            self.assertEqual(m.ebitda, m.revenue - m.total_cogs - m.total_sga)
            self.assertEqual(m.gross_profit, m.revenue - m.total_cogs)
            self.assertEqual(m.ebit, m.ebitda - m.depreciation)
            self.assertEqual(m.pre_tax_profit, m.ebit - m.interest)
            self.assertEqual(m.net_income, m.pre_tax_profit - m.tax_amount)

    def test_no_tax_on_losses(self):
        m = project(baseline(depreciation=200.0, tax_rate=35.0), params(), CFG)
        self.assertLess(m.pre_tax_profit, 0)
        self.assertEqual(m.tax_amount, 0.0)
        self.assertEqual(m.net_income, m.pre_tax_profit)

    def test_tax_on_profit(self):
        m = project(baseline(), params(), CFG)
        self.assertAlmostEqual(m.pre_tax_profit, 94.0 - 30.0 - 12.0)
        self.assertAlmostEqual(m.tax_amount, 52.0 * 0.2)

    def test_valuation_tiers_are_exclusive(self):
        cases = [(0, 6), (20, 6), (20.5, 8), (50, 8), (50.5, 10), (100, 10)]
        for level, expected in cases:
            m = project(baseline(), params(robotization_level=level), CFG)
            self.assertEqual(m.valuation_multiple, expected, f"level {level}")
            self.assertAlmostEqual(m.valuation, m.ebitda * expected)

    def test_zero_revenue_margin_is_undefined(self):
        m = project(baseline(revenue=0.0), params(revenue_growth=50), CFG)
        self.assertIsNone(m.ebitda_margin)
        for f in fields(m):
            v = getattr(m, f.name)
            if v is not None:
                self.assertTrue(math.isfinite(v), f.name)

    def test_vas_share_does_not_move_numbers(self):
        a = project(baseline(), params(revenue_growth=60, vas_share=0), CFG)
        b = project(baseline(), params(revenue_growth=60, vas_share=25), CFG)
        self.assertEqual(a, b)

    def test_repeat_calls_are_identical(self):
        p = params(revenue_growth=73.3, robotization_level=41.7, warehouse_utilization=88.8)
        self.assertEqual(project(baseline(), p, CFG), project(baseline(), p, CFG))

    def test_custom_driver_config(self):
        cfg = DriverConfig(robotization_efficiency_factor=0.5, capex_per_robot_percent=2.0)
        m = project(baseline(), params(robotization_level=100), cfg)
        self.assertAlmostEqual(m.cogs_personnel, 90.0)
        self.assertAlmostEqual(m.capex_requirement, 190.0)

    def test_rejects_contract_violations(self):
        bad = [
            (baseline(cogs_rent=-1.0), params()),
            (baseline(tax_rate=120.0), params()),
            (baseline(revenue=float("nan")), params()),
            (baseline(), params(revenue_growth=-5)),
            (baseline(), params(robotization_level=101)),
            (baseline(), params(warehouse_utilization=0)),
            (baseline(), params(warehouse_utilization=49.9)),
            (baseline(), params(vas_share=30)),
            (baseline(), params(revenue_growth=float("inf"))),
        ]
        for b, p in bad:
            with self.assertRaises(ValueError):
                project(b, p, CFG)

    def test_overflowing_input_is_rejected(self):
        b = baseline(revenue=1e308, cogs_personnel=1e308)
        with self.assertRaisesRegex(ValueError, "overflowed"):
            project(b, params(revenue_growth=100), CFG)

    def test_rejects_invalid_driver_config(self):
        for cfg in (
            DriverConfig(robotization_efficiency_factor=2.0),
            DriverConfig(scale_efficiency_factor=-0.1),
            DriverConfig(asset_life_years=0.0),
        ):
            with self.assertRaises(ValueError):
                project(baseline(), params(), cfg)


if __name__ == '__main__':
    unittest.main()
