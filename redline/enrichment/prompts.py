"""Prompt templates for AI enrichment."""

CLASSIFICATION_SYSTEM = (
    "You are an expert political violence analyst for Bangladesh. "
    "Respond only with valid JSON."
)

CLASSIFICATION_PROMPT = """You are an expert in political violence analysis for Bangladesh. Your task is to classify whether a news article describes political violence.

DEFINITION OF POLITICAL VIOLENCE:
Political violence includes:
- Violence by or against political parties, politicians, activists
- Election-related violence, voter intimidation
- Protests that turn violent, clashes with police/security forces
- Political assassinations, attacks on political figures
- Communal violence with political undertones
- Violence related to political rallies, demonstrations
- State violence against political opposition
- Political terrorism or extremist violence

CLASSIFICATION CRITERIA:
- Be CONSERVATIVE: Only classify as political violence if clearly evident
- Require explicit mention of violence AND political context
- General crime, accidents, or natural disasters are NOT political violence
- Economic protests without violence are NOT political violence
- Peaceful political activities are NOT political violence

ARTICLE TO ANALYZE:
Title: {title}
Content: {content}
Source: {source}
Date: {date}

RESPONSE FORMAT:
Respond with ONLY a valid JSON object:
{{
  "is_political_violence": boolean,
  "confidence": number (0.0 to 1.0),
  "reasoning": "detailed explanation of classification decision",
  "key_indicators": ["list", "of", "key", "words", "or", "phrases"],
  "violence_type": "type of violence if applicable (e.g., 'protest clash', 'political assassination', 'election violence')",
  "location_mentioned": "primary location mentioned in article",
  "political_actors": ["list", "of", "political", "parties", "or", "figures", "mentioned"]
}}

Be thorough but conservative in your analysis."""

LOCATION_SYSTEM = "You are a Bangladesh geography expert. Respond only with valid JSON."

LOCATION_PROMPT = """You are an expert in Bangladeshi geography and news analysis. Your task is to extract and identify all location mentions from news articles, focusing on places within Bangladesh.

BANGLADESH ADMINISTRATIVE STRUCTURE:
- 8 Divisions: Dhaka, Chittagong, Rajshahi, Khulna, Sylhet, Barisal, Rangpur, Mymensingh
- 64 Districts (Zilla)
- 495 Upazilas (Sub-districts)
- Major Cities: Dhaka, Chittagong, Sylhet, Rajshahi, Khulna, Barisal, Rangpur, Mymensingh
- Areas within Dhaka: Dhanmondi, Gulshan, Old Dhaka, Uttara, Wari, Ramna, etc.

TASK:
Extract ALL location mentions from the article, including:
1. Divisions, districts, upazilas, cities, towns, villages
2. Neighborhoods, areas, and localities within cities
3. Landmarks, institutions, roads, markets
4. Both English and Bengali place names
5. Approximate coordinates if you can determine them

ARTICLE TO ANALYZE:
Title: {title}
Content: {content}

RESPONSE FORMAT:
Respond with a JSON object containing:
{{
  "locations": [
    {{
      "extracted_text": "exact text from article",
      "normalized_name": "standardized place name",
      "type": "division|district|upazila|city|area|landmark|other",
      "confidence": number (0-1),
      "context": "surrounding text for context",
      "coordinates": {{
        "lat": number or null,
        "lng": number or null,
        "confidence": number (0-1)
      }},
      "administrative_hierarchy": {{
        "division": "division name if known",
        "district": "district name if known",
        "upazila": "upazila name if known"
      }}
    }}
  ],
  "summary": {{
    "total_locations": number,
    "primary_location": "most relevant location for this news",
    "geographic_scope": "local|regional|national|international"
  }}
}}

GUIDELINES:
- Extract every location mention, but only ones actually in the text
- Provide context from the surrounding text
- Use standardized English names for places
- Estimate coordinates for known places (use your knowledge of Bangladesh geography)
- Mark confidence levels honestly
- If unsure about a location, still include it but with lower confidence"""


def truncate(content: str, max_chars: int) -> str:
    """Trim article content to fit a prompt."""
    if len(content) > max_chars:
        return content[:max_chars] + "..."
    return content
