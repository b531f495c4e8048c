# app_builder/core/prompts.py
"""
Prompts used by the generation pipeline.

Goals:
- Force raw-code-only output the frontend can display as-is.
- Separate generated files with a `/* file: <name> */` delimiter line.
- Stay deterministic: the same specification always yields the same prompt pair.

User text is embedded as-is; nothing is escaped before it reaches the model.
"""

from app_builder.models import NormalizedSpecification, PromptPair

EMPTY_FEATURES_PHRASE = "basic functionality described."

SYSTEM_PROMPT = (
    "You are an expert MVP developer generating code for a simple web application.\n"
    "Output only the raw code (HTML, CSS, JavaScript).\n"
    "Structure the output clearly, using comments like /* file: index.html */, "
    "/* file: style.css */, /* file: script.js */ before each section.\n"
    "Do not include explanations, notes, or markdown formatting (like ```) around the code blocks.\n"
    "Focus on creating functional, basic code suitable for a Minimum Viable Product.\n"
    "Ensure the generated HTML references the CSS and JavaScript files correctly if generated separately.\n"
    "Prioritize simplicity and core functionality based on the user's request."
)


def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def format_feature_list(features) -> str:
    if not features:
        return EMPTY_FEATURES_PHRASE
    return ", ".join(features)


def build_user_prompt(spec: NormalizedSpecification) -> str:
    """
    Prompt body for the generation call. Combined with build_system_prompt above.
    """
    prompt_lines = [
        f"Create a simple web app named '{spec.app_name}'.",
        f"Description: '{spec.description}'.",
        f"Key features: {format_feature_list(spec.features)}.",
        "Generate the necessary HTML (index.html), CSS (style.css), and JavaScript (script.js).",
        "Remember to structure the output with /* file: ... */ comments before each section.",
    ]
    return "\n".join(prompt_lines)


def build_prompt_pair(spec: NormalizedSpecification) -> PromptPair:
    return PromptPair(
        system_instruction=build_system_prompt(),
        user_instruction=build_user_prompt(spec),
    )
