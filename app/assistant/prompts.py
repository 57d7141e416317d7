"""Assistant prompts — templates, response schemas and input phrasing helpers."""

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "mr": "Marathi",
    "ta": "Tamil",
    "te": "Telugu",
    "kn": "Kannada",
    "bn": "Bengali",
    "gu": "Gujarati",
    "pa": "Punjabi",
    "ml": "Malayalam",
}


def language_name(code: str) -> str:
    """Human name for a language code; unknown codes pass through."""
    return LANGUAGE_NAMES.get((code or "en").strip().lower(), code)


def describe_location(location: str) -> str:
    """Anything with a comma is a "lat,lon" pair, everything else a region name."""
    if "," in location:
        return f"the area around GPS coordinates {location.strip()} (latitude, longitude)"
    return f"the region of {location.strip()}"


# Plain-text prompts

CROP_DESCRIPTION_PROMPT = """Describe the crop "{crop}" for a farmer in under 100 words.
Cover what it is, the climate it prefers and why it is worth growing.
Respond in {language}. Use plain text, no markdown."""

CROP_DIAGNOSIS_PROMPT = """You are a plant pathologist helping a smallholder farmer.
Look at this photo of a crop and:
1. Identify the crop if you can.
2. Name the most likely disease, pest or deficiency, or say the plant looks healthy.
3. Give the visible symptoms that support your diagnosis.
4. Recommend treatment and prevention steps a farmer can act on, organic options first.
Keep it short and practical. Respond in {language}."""

CHAT_SYSTEM_PROMPT = """You are Krishi Mitra, a friendly assistant for farmers, vendors and community
coordinators on an agricultural marketplace.
Answer questions about crops, soil, weather, pests, markets and government schemes.
Keep answers short and practical. If you are not sure, say so.
Always respond in {language}.{location_line}"""

CHAT_LOCATION_LINE = "\nThe user is located in {place}; tailor advice to local conditions."


# Structured prompts

CROP_GUIDELINE_PROMPT = """Give a cultivation guideline for the crop "{crop}".
Include the typical duration from sowing to harvest in days, recommended fertilizer,
suitable soil, ideal temperature range and the main growth stages in order.
Write every text value in {language}."""

FARMING_TIPS_PROMPT = """You are an agronomist advising farmers in {place}.
Considering the current season and typical local weather, give 5 timely, actionable farming tips.
Each tip has a short title, 1-2 sentences of content and one category from:
WEATHER, CROP, SOIL, PEST, MARKET.
Write titles and content in {language}; keep category values in English."""

VENDOR_TIPS_PROMPT = """You are a market advisor for agricultural produce vendors in {place}.
Give 5 actionable tips on buying, storing and selling produce this season.
Each tip has a short title, 1-2 sentences of content and one category from:
PRICING, DEMAND, STORAGE, LOGISTICS, SOURCING.
Write titles and content in {language}; keep category values in English."""

COMMUNITY_TIPS_PROMPT = """You are an advisor for farming community coordinators in {place}.
Give 5 ideas to support local farmers: events, trainings, government schemes,
collaboration and sustainable practices.
Each tip has a short title, 1-2 sentences of content and one category from:
EVENT, TRAINING, SCHEME, COLLABORATION, SUSTAINABILITY.
Write titles and content in {language}; keep category values in English."""


# Response schemas (OpenAPI subset accepted by Gemini)

CROP_GUIDELINE_SCHEMA = {
    "type": "object",
    "properties": {
        "durationDays": {"type": "integer"},
        "fertilizer": {"type": "string"},
        "soil": {"type": "string"},
        "temperature": {"type": "string"},
        "stages": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["durationDays", "fertilizer", "soil", "temperature", "stages"],
}


def tips_schema(categories: list[str]) -> dict:
    return {
        "type": "object",
        "properties": {
            "tips": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "title": {"type": "string"},
                        "content": {"type": "string"},
                        "category": {"type": "string", "enum": categories},
                    },
                    "required": ["title", "content", "category"],
                },
            },
        },
        "required": ["tips"],
    }


FARMER_TIPS_SCHEMA = tips_schema(["WEATHER", "CROP", "SOIL", "PEST", "MARKET"])
VENDOR_TIPS_SCHEMA = tips_schema(["PRICING", "DEMAND", "STORAGE", "LOGISTICS", "SOURCING"])
COMMUNITY_TIPS_SCHEMA = tips_schema(["EVENT", "TRAINING", "SCHEME", "COLLABORATION", "SUSTAINABILITY"])
