from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List

from .catalog import Catalog, load_catalog
from .scoring import ScoringPolicy, get_policy

YES_NO = ["Yes", "No"]
QUALITY = ["Excellent", "Good", "Fair", "Poor"]
CONSISTENCY = ["Consistently", "Usually", "Sometimes", "Rarely"]
DISCUSSION = ["Discussed thoroughly", "Discussed", "Mentioned briefly", "Not discussed"]
PROVISION = ["Provided", "Partially provided", "Not provided"]
COMPLETION = ["Completed", "Partially completed", "Not completed"]


def _binary(description: str, points: int, options: List[str] = YES_NO) -> Dict[str, Any]:
	return {"description": description, "points": points, "inputType": "binary", "options": options}


def _multiple(description: str, points: int, options: List[str]) -> Dict[str, Any]:
	return {"description": description, "points": points, "inputType": "multiple", "options": options}


def _text(description: str, points: int, placeholder: str, long: bool = False) -> Dict[str, Any]:
	return {
		"description": description,
		"points": points,
		"inputType": "longText" if long else "shortText",
		"placeholder": placeholder,
	}


CONSULTATION_SECTIONS: List[Dict[str, Any]] = [
	{
		"section": "Introduction & Professionalism",
		"totalPoints": 15,
		"criteria": [
			_binary("Doctor introduces themselves professionally", 3),
			_binary("Confirms the patient's identity appropriately", 3),
			_binary("Explains the purpose of the consultation clearly", 3),
			_binary("Maintains appropriate eye contact and body language", 3),
			_multiple("Shows empathy and cultural sensitivity", 3, QUALITY),
		],
	},
	{
		"section": "Travel History Taking",
		"totalPoints": 25,
		"criteria": [
			_binary("Asks about planned travel destinations", 3),
			_binary("Inquires about duration of stay at each location", 3),
			_binary("Asks about departure and return dates", 2),
			_binary("Determines the purpose of travel", 3),
			_binary("Asks about travel companions", 2),
			_binary("Inquires about accommodation type and location", 3),
			_binary("Asks about urban vs rural areas to be visited", 2),
			_binary("Inquires about previous international travel", 2),
			_binary("Asks about previous travel-related health issues", 3),
			_binary("Reviews current vaccination status", 2),
		],
	},
	{
		"section": "Medical History Assessment",
		"totalPoints": 20,
		"criteria": [
			_binary("Reviews pre-existing medical conditions", 4),
			_binary("Asks about current medications", 4),
			_binary("Inquires about allergies and adverse reactions", 4),
			_multiple("Asks about pregnancy status (if applicable)", 3, ["Yes, asked", "Not applicable", "Forgot to ask"]),
			_binary("Reviews immunocompromised status", 3),
			_binary("Asks about previous adverse vaccine reactions", 2),
		],
	},
	{
		"section": "Risk Assessment & Consultation",
		"totalPoints": 25,
		"criteria": [
			_multiple("Identifies destination-specific health risks", 5, ["Comprehensive", "Adequate", "Basic", "Inadequate"]),
			_binary("Assesses risk of vector-borne diseases", 4),
			_binary("Discusses food and water safety risks", 4),
			_multiple(
				"Consults reliable travel health resources",
				5,
				["Used multiple sources", "Used one source", "Relied on memory", "No consultation"],
			),
			_binary("Considers individual patient risk factors", 4),
			_multiple(
				"Discusses altitude-related risks (if applicable)",
				3,
				["Discussed thoroughly", "Mentioned briefly", "Not applicable", "Not discussed"],
			),
		],
	},
	{
		"section": "Preventive Advice & Recommendations",
		"totalPoints": 30,
		"criteria": [
			_multiple("Provides appropriate vaccination recommendations", 6, ["Comprehensive", "Adequate", "Basic", "Inadequate"]),
			_binary("Discusses travel insurance importance", 3),
			_multiple(
				"Explains food and water safety precautions",
				4,
				["Detailed explanation", "Basic advice", "Brief mention", "Not discussed"],
			),
			_multiple("Provides insect bite prevention advice", 4, ["Comprehensive", "Adequate", "Basic", "Not discussed"]),
			_multiple(
				"Discusses safe sexual practices",
				3,
				["Discussed appropriately", "Mentioned briefly", "Not discussed", "Not applicable"],
			),
			_binary("Advises on sun protection measures", 2),
			_multiple(
				"Provides malaria prophylaxis recommendations (if needed)",
				4,
				["Appropriate prescription", "Discussed but not needed", "Inadequate advice", "Not discussed"],
			),
			_binary("Discusses post-travel health monitoring", 2),
			_binary("Provides emergency contact information", 2),
		],
	},
	{
		"section": "Documentation & Follow-up",
		"totalPoints": 15,
		"criteria": [
			_multiple(
				"Completes vaccination records accurately",
				4,
				["Complete and accurate", "Mostly complete", "Basic documentation", "Inadequate"],
			),
			_binary("Provides written travel health information", 4),
			_binary("Documents consultation notes appropriately", 3),
			_multiple(
				"Arranges appropriate follow-up if needed",
				2,
				["Arranged when needed", "Not needed", "Should have arranged", "Unclear"],
			),
			_binary("Provides clear instructions for medication use", 2),
		],
	},
	{
		"section": "Communication & Patient Education",
		"totalPoints": 20,
		"criteria": [
			_multiple("Uses clear, understandable language", 4, QUALITY),
			_multiple(
				"Encourages questions and provides clarifications",
				4,
				["Actively encouraged", "Responded well", "Minimal encouragement", "Discouraged questions"],
			),
			_binary("Checks patient understanding throughout consultation", 4),
			_multiple("Demonstrates cultural sensitivity", 3, QUALITY),
			_binary("Addresses patient concerns appropriately", 3),
			_binary("Maintains confidentiality and privacy", 2),
		],
	},
]

# History Taking criteria add up to 22 against a stated 20; kept as authored.
SCREENING_SECTIONS: List[Dict[str, Any]] = [
	{
		"section": "Introduction",
		"totalPoints": 10,
		"criteria": [
			_binary("Greets the traveller and introduces themselves", 5),
			_binary("Explains the purpose of the pre-travel screening", 5),
		],
	},
	{
		"section": "History Taking",
		"totalPoints": 20,
		"criteria": [
			_text("Planned destinations", 2, "e.g. Thailand, Vietnam, Cambodia", long=True),
			_text("Duration of stay at each destination", 2, "e.g. 2 weeks in Thailand, 1 week in Vietnam", long=True),
			_text("Departure date", 1, "e.g. March 12, 2024"),
			_text("Return date", 1, "e.g. April 2, 2024"),
			_text("Purpose of travel", 1, "Leisure, business, education, volunteer work..."),
			_text("Travelling alone or with others", 1, "Alone / with others"),
			_text("Relationship to travel companions", 1, "Family, friends, colleagues, partner..."),
			_text("Accommodation type", 1, "Hotel, hostel, camping, local family..."),
			_text("Urban or rural environments", 1, "Urban only, rural only, both"),
			_text("Previous international travel", 1, "Where and when", long=True),
			_text("Previous travel-related health issues", 1, "Any illness during or after past trips", long=True),
			_text("Vaccination history", 1, "Vaccines received and dates", long=True),
			_text("Chronic conditions and allergies", 2, "List conditions and known allergies", long=True),
			_text("Current medications", 2, "Including contraceptives and supplements"),
			_text("Food and water plans", 1, "How the traveller plans to eat and drink", long=True),
			_multiple("Familiarity with destination health risks", 1, ["Very familiar", "Somewhat familiar", "Not familiar"]),
			_text("Onward travel plans", 1, "Any travel planned after return", long=True),
			_multiple("Awareness of travel insurance needs", 1, ["Very aware", "Somewhat aware", "Not aware"]),
		],
	},
	{
		"section": "Risk Assessment",
		"totalPoints": 20,
		"criteria": [
			_text("Destination-specific health risks identified", 4, "Malaria, dengue, traveller's diarrhoea...", long=True),
			_text("Access to medical care at destination", 4, "Hospitals, insurance, evacuation cover", long=True),
			_text("Planned activities", 2, "Hiking, diving, markets...", long=True),
			_binary("High-risk activities or destinations flagged", 10),
		],
	},
	{
		"section": "Health Advice",
		"totalPoints": 20,
		"criteria": [
			_multiple("Written health advice", 4, PROVISION),
			_multiple("Food and water safety", 4, DISCUSSION),
			_multiple("Insect bite prevention", 4, DISCUSSION),
			_multiple("Sun and heat protection", 4, DISCUSSION),
			_multiple("What to do if unwell abroad", 4, DISCUSSION),
		],
	},
	{
		"section": "Documentation",
		"totalPoints": 10,
		"criteria": [
			_multiple("Vaccination record", 5, COMPLETION),
			_binary("International certificate of vaccination", 5, ["Provided", "Not provided"]),
		],
	},
	{
		"section": "Communication Skills",
		"totalPoints": 10,
		"criteria": [
			_multiple("Clarity of explanations", 5, QUALITY),
			_multiple("Checks the traveller's understanding", 5, CONSISTENCY),
		],
	},
	{
		"section": "Professionalism",
		"totalPoints": 10,
		"criteria": [
			_multiple("Overall professionalism", 5, QUALITY),
			_multiple("Respects the traveller's choices", 5, CONSISTENCY),
		],
	},
]


@dataclass(frozen=True)
class QuizVariant:
	key: str
	catalog: Catalog
	policy: ScoringPolicy
	require_assessor: bool


_VARIANT_SOURCES = {
	"consultation": ("Travel Health Consultation Assessment", CONSULTATION_SECTIONS, "keyword", True),
	"screening": ("Pre-Travel Screening Assessment", SCREENING_SECTIONS, "positional", False),
}

VARIANT_KEYS = tuple(_VARIANT_SOURCES)


def get_variant(key: str, *, strict: bool = False) -> QuizVariant:
	try:
		title, sections, policy_name, require_assessor = _VARIANT_SOURCES[key]
	except KeyError:
		raise ValueError(f"Unknown quiz variant '{key}' (expected one of {', '.join(VARIANT_KEYS)})")
	catalog = load_catalog(key, title, sections, strict=strict)
	return QuizVariant(key=key, catalog=catalog, policy=get_policy(policy_name), require_assessor=require_assessor)
