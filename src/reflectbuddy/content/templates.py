"""
Static Dutch texts: welcome message, empathy prefixes, generation prompt,
badge notifications.
"""

from __future__ import annotations

WELCOME_MESSAGE = (
    "Hoi! Ik ben je Reflectie-Buddy 🤝\n\n"
    "Ik help je graag bij het reflecteren op je klaservaringen. "
    "We gaan samen door de stappen van Gibbs' reflectiecyclus.\n\n"
    "Vertel me eens: heb je vandaag een uitdagende situatie meegemaakt in de klas?"
)

# Keyed by EmotionLabel value; "neutral" is the default entry
EMPATHY_PREFIXES = {
    "frustrated": "Ik begrijp dat dit frustrerend was voor je. ",
    "anxious": "Het klinkt alsof je je onzeker voelde. Dat is heel normaal! ",
    "confident": "Wat fijn dat je je zelfverzekerd voelde! ",
    "overwhelmed": "Het lijkt alsof het veel was om te verwerken. ",
    "sad": "Ik hoor dat dit je raakte. ",
    "neutral": "Bedankt voor het delen van je ervaring. ",
}

GENERATION_PROMPT = """\
Je bent een empathische AI-begeleider voor pabo-studenten.

Huidige reflectiefase: {phase_name}
Gebruiker emotie: {emotion}
Gebruiker bericht: "{user_text}"

Reageer empathisch en stel een vervolgvraag die past bij de {phase_name} fase van Gibbs' reflectiecyclus.

Richtlijnen:
- Gebruik een warme, ondersteunende toon
- Erken de emotie van de student
- Stel een concrete vervolgvraag
- Bied waar relevant theoretische koppeling
- Geef praktische tips voor de klaspraktijk
- Gebruik Nederlandse taal, informeel maar professioneel

Antwoord in maximaal 3 zinnen."""

BADGE_NOTIFICATION = "🎉 Nieuwe badge behaald: {icon} {name}! {description}."
