"""
Caller-facing messages and phrase lists (Hinglish / Hindi / Gujarati / Kannada).

THIS IS THE ONLY APP FILE ALLOWED TO CONTAIN NON-LATIN SCRIPT TEXT.

All text sent to users must be retrieved from this module.
"""

from typing import Dict

# Caller-facing messages
CALLER_MESSAGES: Dict[str, str] = {
    # Greetings
    "greeting": (
        "Namaste! Main aapka painting assistant hoon. "
        "Aap bata sakte ho kis type ka painting ka kaam chahiye (ghar, office, interior, exterior) aur location kaha hai?"
    ),
    "general_question": (
        "Ye ek general sawaal lag raha hai. Agar yeh kisi specific project ke baare mein hai, "
        "to please customer ka naam aur area (jaise HSR, Whitefield, JP Nagar) batao taaki sahi project pe baat ho sake."
    ),

    # Project binding
    "lead_hint_echo": 'Aap shayad "{lead_hint}" wale kaam ki baat kar rahe ho. ',
    "project_binding_required": (
        "Ye {action_label} kisi purane project ke liye lag raha hai. "
        "Please batao kis project ke liye – customer ka naam, area (HSR / Whitefield / JP Nagar) "
        "ya approximate date (jaise kal ka site visit) taaki main sahi project choose kar saku."
    ),
    "action_label_measurement": "measurement",
    "action_label_update": "update",
    "measurement_logged": (
        "Theek hai, maine measurement note kar liya hai. Agar kuch aur detail (colour, coats, area breakup) "
        "add karna ho to batao, ya phir estimate ke baare mein puch sakte ho."
    ),

    # Quote generation
    "quote_dependencies_header": "Quote banane se pehle kuch details chahiye:",
    "dependency_project_required": (
        "Kis project ke liye quote chahiye? Customer ka naam ya area batao taaki sahi project select ho sake."
    ),
    "dependency_measurement_required": (
        "Site ka measurement abhi tak nahi mila – BHK, total sqft ya paintable area batao."
    ),
    "dependency_sqft_required": (
        "Sirf BHK se quote accurate nahi banega – total sqft ya paintable area bhi batao."
    ),
    "quote_generating": "Theek hai, main is project ke liye quote options bana raha hoon.",

    # Lead confirmation
    "lead_confirm_yes": (
        "Theek hai, lead confirm ho gaya hai. Ab site visit schedule karte hain – "
        "aapko kaunse din aur kis time convenient hoga customer location par?"
    ),
    "lead_confirm_no": (
        "Theek hai, batao kya change karna hai – location, area, customer detail ya painting ka scope?"
    ),
    "lead_recap": (
        "Mere hisaab se painting ka kaam samajh aa gaya hai aur saari important details mil gayi hain."
        "{recap} Kya yeh sahi hai?"
    ),
    "lead_recap_parts": " Quick recap – {parts}.",

    # Missing-field follow-ups
    "ask_customer_name": "Customer ka naam kya hai?",
    "ask_customer_phone": "Customer ka mobile number share karoge? (+91 se start ho sakta hai)",
    "ask_location": "Site ka exact location batao (area + street / landmark).",
    "ask_job_type": (
        "Painting ka exact kaam batao – kis area mein (room / poora ghar / office / exterior), "
        "kaunsi surface (wall, ceiling, door/window, metal, wood) aur purana paint ki condition kaisi hai?"
    ),
    "ask_urgency": "Ye kaam kab tak karwana hai? (aaj, kal, iss hafte, next week, etc.)",

    # Site visit
    "site_visit_followup": (
        "Site visit ke liye ek clear date aur time batao (jaise: kal dupahar 3 baje, Sunday morning 10 baje)."
    ),

    # Errors
    "analysis_failed": "Lead analyze karte waqt kuch problem aayi. Thodi der baad phir se try karoge?",
    "analysis_invalid_text": "Message khaali hai ya bahut lamba hai (max {max_chars} characters).",

    # Fallback
    "fallback": (
        "Mujhe painting ka kaam samajh aa gaya hai. Agar kuch aur specific chahiye "
        "to batao, warna hum site visit schedule kar sakte hain."
    ),

    # Quote options (tool executor output)
    "quote_options_header": "Main aapke liye quote options ready kar diya hai:\n",
    "quote_options_footer": "Aap kaunse option ko prefer karenge? Ya agar koi modification chahiye to batao.",
    "quote_options_empty": "Kuch quotes generate nahi ho paye. Kripya thoda detail aur share karein.",

    # Project step flow
    "project_ask_work_location": (
        "कृपया बताइए कि पेंटिंग का काम कहाँ हो रहा है? (जैसे: दो बी एच के फ्लैट, बंगला, ऑफिस, सोसाइटी का विंग आदि)"
    ),
    "project_ask_rooms_count": (
        "कितने कमरे पेंट करने हैं? (जैसे: दो कमरे, तीन कमरे, एक हॉल और दो बेडरूम आदि)"
    ),
    "project_rooms_default": "कमरे",
    "project_assign_ask": (
        "ठीक है, आपने बताया कि यहाँ {rooms} पेंट करने हैं। "
        "हमारे पास 2 पेंटिंग रिसोर्स उपलब्ध हैं, क्या मैं इन्हें इस काम के लिए असाइन कर दूँ? "
        'कृपया जवाब में सिर्फ "कर दो" या "मत करो" बोलें।'
    ),
    "project_assign_yes": "ठीक है, मैंने 2 रिसोर्स इस काम के लिए असाइन कर दिए हैं।",
    "project_assign_no": "ठीक है, मैं अभी कोई रिसोर्स असाइन नहीं कर रहा हूँ।",
    "project_assign_reprompt": (
        'कृपया सिर्फ "कर दो" या "मत करो" में जवाब दें। क्या मैं 2 रिसोर्स इस काम के लिए असाइन कर दूँ?'
    ),
}


def get_yes_phrases() -> list[str]:
    """Affirmative answers, matched exactly after punctuation cleanup."""
    return [
        # Hindi
        "कर दो", "करदो", "कर दीजिए", "हाँ कर दो", "haan kar do",
        "हाँ", "हां", "हा", "जी", "हाँ जी",
        # Gujarati
        "હા", "હાં", "હા જી", "જી",
        # Kannada
        "ಹಾ", "ಹಾಂ",
        # Romanized / English
        "haan", "ha", "haa", "han", "haana", "hān",
        "yes", "y", "ye", "ji",
    ]


def get_no_phrases() -> list[str]:
    """Negative answers, matched exactly after punctuation cleanup."""
    return [
        # Hindi
        "मत करो", "मत कर", "मत कीजिए",
        "रद्द", "रद", "rad", "cancel", "कैंसल",
        "नहीं", "नहि", "मत",
        # Gujarati
        "ના", "નહીં", "નહિ",
        # Romanized / English
        "nahin", "nahi", "na", "no", "n", "mat",
    ]


def get_yes_fragments() -> list[str]:
    """Fragments that count as yes inside short answers only."""
    return ["હા"]


def get_no_fragments() -> list[str]:
    """Fragments that count as no inside short answers only."""
    return ["ना", "नहीं", "ના", "નહીં"]


def get_greeting_phrases() -> list[str]:
    """Pure greetings that never describe a job."""
    return [
        "hi",
        "hello",
        "hey",
        "namaste",
        "namaskar",
        "good morning",
        "good evening",
        "good afternoon",
        "राम राम",
        "jai shree krishna",
        "जय श्री कृष्ण",
    ]


def get_caller_text(key: str, **variables) -> str:
    """
    Get caller-facing text.
    This function must NEVER return an empty string.
    """

    template = CALLER_MESSAGES.get(key)

    if not isinstance(template, str) or not template.strip():
        template = CALLER_MESSAGES.get("fallback")

    if not isinstance(template, str) or not template.strip():
        # Absolute last resort, must never be empty
        return "Namaste"

    try:
        text = template.format(**variables) if variables else template
    except (KeyError, IndexError):
        text = template

    # Final guard
    if not text.strip():
        return "Namaste"

    return text
