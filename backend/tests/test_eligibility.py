"""
Tests for the rule-based eligibility scoring.
"""

import unittest
from sports_reels.services.eligibility_service import (
    ScoringData,
    calculate_esc_score,
    calculate_transfer_eligibility,
    calculate_uk_gbe_score,
    get_minutes_status,
    get_status,
    league_band_multiplier,
    round_half_up,
    total_minutes,
)


class TestHelpers(unittest.TestCase):

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(18.75), 19)
        self.assertEqual(round_half_up(18.49), 18)

    def test_status_thresholds(self):
        self.assertEqual(get_status(60), "green")
        self.assertEqual(get_status(35), "yellow")
        self.assertEqual(get_status(34), "red")

    def test_minutes_status(self):
        self.assertEqual(get_minutes_status(800), "green")
        self.assertEqual(get_minutes_status(600), "yellow")
        self.assertEqual(get_minutes_status(599), "red")

    def test_league_band_multiplier(self):
        self.assertEqual(league_band_multiplier(1), 1.0)
        self.assertEqual(league_band_multiplier(5), 0.25)
        self.assertEqual(league_band_multiplier(None), 0.5)

    def test_minutes_take_best_evidence(self):
        data = ScoringData(
            club_minutes_current_season=300,
            club_minutes_last_12_months=100,
            season_metrics=[(500, 0, 0)],
            international_records=[("senior", 4), ("u21", 2)],
            video_minutes=[90, 45],
            insight_minutes=[90],
        )
        # club max(400, 500) + international 6 caps * 45 + video max(135, 90)
        self.assertEqual(total_minutes(data), 500 + 270 + 135)


class TestTransferEligibility(unittest.TestCase):

    def test_empty_profile_is_red(self):
        result = calculate_transfer_eligibility(ScoringData())

        self.assertEqual(result["total_minutes_verified"], 0)
        self.assertEqual(result["schengen"]["score"], 15)
        self.assertEqual(result["p1"]["score"], 19)
        self.assertEqual(result["o1"]["score"], 0)
        self.assertEqual(result["uk_gbe"]["score"], 16)
        self.assertEqual(result["uk_gbe"]["status"], "red")
        self.assertEqual(result["esc"]["score"], 0)
        self.assertFalse(result["esc_eligible"])
        self.assertEqual(result["overall_status"], "red")
        self.assertEqual(result["minutes_needed"], 800)
        self.assertEqual(result["caps_needed"], 5)
        self.assertLessEqual(len(result["recommendations"]), 5)
        self.assertEqual(
            result["recommendations"][0],
            "Play 800 more minutes to reach minimum 800 minutes",
        )

    def test_established_international_is_green(self):
        data = ScoringData(
            league_band=1,
            club_minutes_current_season=900,
            continental_games=10,
            market_value=2_000_000,
            season_metrics=[(900, 10, 5)],
            international_records=[("senior", 20)],
        )

        result = calculate_transfer_eligibility(data)

        self.assertEqual(result["total_minutes_verified"], 1800)
        self.assertEqual(result["schengen"]["score"], 98)
        self.assertEqual(result["uk_gbe"]["breakdown"]["gbe_points"], 34)
        self.assertEqual(result["uk_gbe"]["score"], 68)
        self.assertEqual(result["uk_gbe"]["status"], "green")
        self.assertEqual(result["esc"]["score"], 100)
        self.assertEqual(result["overall_status"], "green")
        self.assertEqual(result["minutes_needed"], 0)
        self.assertEqual(result["caps_needed"], 0)

    def test_recommendations_are_unique(self):
        result = calculate_transfer_eligibility(ScoringData(league_band=4))
        self.assertEqual(len(result["recommendations"]), len(set(result["recommendations"])))


class TestUkRoutes(unittest.TestCase):

    def test_gbe_yellow_opens_esc(self):
        data = ScoringData(league_band=2)
        gbe = calculate_uk_gbe_score(data)

        self.assertEqual(gbe.breakdown["gbe_points"], 12)
        self.assertEqual(gbe.status, "yellow")

        esc = calculate_esc_score(data, gbe)
        self.assertEqual(esc.score, 50)
        self.assertEqual(esc.status, "yellow")
        self.assertTrue(calculate_transfer_eligibility(data)["esc_eligible"])

    def test_esc_not_assessed_below_yellow(self):
        data = ScoringData(league_band=5)
        esc = calculate_esc_score(data, calculate_uk_gbe_score(data))
        self.assertEqual(esc.score, 0)
        self.assertEqual(esc.status, "red")
        self.assertIn("GBE yellow zone", esc.recommendations[0])


if __name__ == "__main__":
    unittest.main()
