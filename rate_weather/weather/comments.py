"""Weather icons and the remarks shown under each forecast."""
import random
from typing import Callable, Dict, List

from rate_weather.weather.models import Weather

WEATHER_ICONS: Dict[Weather, str] = {
    Weather.SUNNY: "☀️",
    Weather.CLOUDY: "⛅",
    Weather.RAINY: "🌧️",
}

WEATHER_COMMENTS: Dict[Weather, List[str]] = {
    Weather.SUNNY: [
        "良いタイミングです。今日は替え時かもしれません。",
        "平均より有利なレートです。検討してみては？",
        "今日のレートは好調です。チャンスかも。",
    ],
    Weather.CLOUDY: [
        "平均的なレートです。急ぎでなければ様子見も。",
        "標準的な水準です。焦らず判断しましょう。",
        "平均的なタイミングです。落ち着いて検討を。",
    ],
    Weather.RAINY: [
        "平均より不利なレートです。待つのも一つの手。",
        "今日は様子見がよいかもしれません。",
        "少し待ってみるのもありかもしれません。",
    ],
}


def pick_comment(
    weather: Weather,
    randrange: Callable[[int], int] = random.randrange,
) -> str:
    """Pick one remark for the weather uniformly at random.

    ``randrange(n)`` must return an index in ``[0, n)``.
    """
    comments = WEATHER_COMMENTS[Weather(weather)]
    return comments[randrange(len(comments))]
