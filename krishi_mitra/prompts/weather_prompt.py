WEATHER_FORECAST_PROMPT = "Get the 5-day weather forecast for {location}."
