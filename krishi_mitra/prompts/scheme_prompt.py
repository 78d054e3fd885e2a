SCHEME_REMINDER_PROMPT = """
Based on the following farmer's profile, generate a list of 2-3 relevant (but simulated) Indian government agricultural schemes.
- Location: {location}
- Main Crop: {main_crop}
- Land Size: {land_size} acres
- Irrigation: {irrigation_method}

Provide key details for each scheme: a brief description, general eligibility criteria, an upcoming application deadline (within the next 30-90 days), and a placeholder application link.
"""
