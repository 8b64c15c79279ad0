"""
Tests for dominant weather and wet week classification.
"""

from dengue_watch.utils.weather_classification import (
    UNCLASSIFIED,
    DominantWeather,
    classify_dominant_weather,
    is_wet_week,
    most_common_description,
)


class TestDominantWeather:
    """Test dominant weather category classification."""

    def test_rain_beats_more_frequent_description(self):
        result = classify_dominant_weather(["Clear sky", "Light rain", "Clear sky"])
        assert result == DominantWeather("Rain", "Light rain", True)

    def test_thunderstorm_category(self):
        result = classify_dominant_weather(["Cloudy", "Thunderstorm with hail"])
        assert result.category == "Thunderstorm"
        assert result.matched_by_priority is True

    def test_first_day_order_decides_between_high_priority_terms(self):
        result = classify_dominant_weather(["Cloudy", "Storm", "Heavy rain"])
        assert result.category == "Storm"
        assert result.description == "Storm"

    def test_secondary_terms_after_high_priority(self):
        result = classify_dominant_weather(["Overcast", "Light drizzle", "Overcast"])
        assert result == DominantWeather("Drizzle", "Light drizzle", True)

        result = classify_dominant_weather(["Rain showers", "Drizzle"])
        assert result.category == "Rain"

    def test_fallback_to_most_common_description(self):
        result = classify_dominant_weather(["clear"] * 7)
        assert result == DominantWeather("Clear", "clear", False)

    def test_fallback_is_case_insensitive(self):
        result = classify_dominant_weather(["Cloudy", "cloudy", "Clear sky"])
        assert result.category == "Cloudy"
        assert result.matched_by_priority is False

    def test_fallback_tie_uses_ordinal_order(self):
        result = classify_dominant_weather(["Overcast", "Cloudy"])
        assert result.description == "Cloudy"

    def test_no_descriptions(self):
        assert classify_dominant_weather([]) == DominantWeather(UNCLASSIFIED, None, False)
        assert classify_dominant_weather([None, "", "  "]) == DominantWeather(UNCLASSIFIED, None, False)

    def test_most_common_description_prefers_smallest_spelling(self):
        assert most_common_description(["clear", "Clear", "Rain"]) == "Clear"
        assert most_common_description([None]) is None


class TestWetWeek:
    """Test wet week classification."""

    def test_precipitation_threshold(self):
        assert is_wet_week([10, 10, 10, 10, 10, 10, 10], []) is True
        assert is_wet_week([0, 0, 5, 40, 10, 0, 0], ["clear"] * 7) is True

    def test_below_threshold_and_dry_descriptions(self):
        assert is_wet_week([1, 1, 1, 1, 1, 1, 1], ["clear"] * 7) is False

    def test_four_drizzle_days(self):
        assert is_wet_week([1] * 7, ["drizzle"] * 4 + ["clear"] * 3) is True
        assert is_wet_week([1] * 7, ["Light drizzle", "Shower", "Showers", "Drizzle", "clear"]) is True

    def test_three_drizzle_days_are_not_enough(self):
        assert is_wet_week([1] * 7, ["drizzle"] * 3 + ["clear"] * 4) is False

    def test_single_high_priority_day(self):
        assert is_wet_week([0] * 7, ["clear"] * 6 + ["Thunderstorm"]) is True

    def test_no_precipitation_data_is_never_wet(self):
        assert is_wet_week([], ["Heavy rain"] * 7) is False
        assert is_wet_week(None, ["Heavy rain"] * 7) is False
