from typing import Dict, Union

from promptgen.schemas.enums import AppCategory, Verbosity

BASE_PROMPT = (
    "You are an expert software developer specializing in creating detailed and "
    "comprehensive prompts for application development. Your task is to enhance and "
    "expand the user's app description into a detailed prompt that covers all "
    "necessary aspects of the application."
)

FOCUS_CLAUSES: Dict[AppCategory, str] = {
    AppCategory.HTML_GAMES: (
        "Focus on HTML5 Canvas, JavaScript game mechanics, sprite management, collision "
        "detection, game loop implementation, and responsive design considerations. "
        "Include requirements for assets, animations, and sound effects."
    ),
    AppCategory.REACT_VITE_GAMES: (
        "Focus on React component architecture, state management, game logic "
        "implementation using hooks, asset management with Vite, and performance "
        "optimization. Include considerations for build process and deployment."
    ),
    AppCategory.THREEJS_VISUALIZATIONS: (
        "Focus on Three.js scene setup, camera positioning, lighting, material properties, "
        "geometry creation, animation system, and user interactions. Include requirements "
        "for 3D models, textures, and performance optimization."
    ),
    AppCategory.PYTHON_UTILITIES: (
        "Focus on command-line interface design, input validation, error handling, file "
        "operations, and potential integration with external services or APIs. Include "
        "requirements for dependencies, configuration, and documentation."
    ),
}

VERBOSITY_CLAUSES: Dict[Verbosity, str] = {
    Verbosity.CONCISE: (
        "Respond with no meta-commentary: output only the prompt text itself."
    ),
    Verbosity.STANDARD: (
        "You may add brief context before the prompt where it helps, but keep it short."
    ),
    Verbosity.DETAILED: (
        "Provide full explanations alongside the prompt, describing the reasoning behind "
        "each requirement."
    ),
}


def _lookup(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


def build_system_prompt(
    app_category: Union[AppCategory, str],
    verbosity: Union[Verbosity, str] = Verbosity.STANDARD,
) -> str:
    """
    Compose the provider-agnostic system instruction:
    base role statement, category focus clause, verbosity clause.
    Unknown categories get the base statement alone; unknown verbosity falls back to Standard.
    """
    focus = FOCUS_CLAUSES.get(_lookup(AppCategory, app_category))
    if focus is None:
        return BASE_PROMPT
    sections = [BASE_PROMPT, focus]
    level = _lookup(Verbosity, verbosity) or Verbosity.STANDARD
    sections.append(VERBOSITY_CLAUSES[level])
    return "\n\n".join(sections)


def compose_user_message(system: str, description: str) -> str:
    # used by providers that have no separate system slot
    return f"{system}\n\nUser Request: {description}"
