PRICE_TREND_PROMPT = """
Analyze the market price for "{crop}" in the region of "{location}, India".
Provide a realistic but simulated price trend analysis.
- Generate historical data for the last {history_days} days, from {start_date} to {end_date}.
- Generate a price prediction for the next {prediction_days} days.
- The price should be in INR per quintal.
- Write a brief, one-paragraph summary of the trend and your prediction.
"""
