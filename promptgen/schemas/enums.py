from enum import Enum


class Provider(str, Enum):
    OPENAI = "OpenAI"
    OPENAI_COMPATIBLE = "OpenAI Compatible"
    ANTHROPIC = "Anthropic"
    GEMINI = "Google Gemini"


class AppCategory(str, Enum):
    HTML_GAMES = "HTML Games"
    REACT_VITE_GAMES = "React Vite Games"
    THREEJS_VISUALIZATIONS = "HTML Three.js Visualizations"
    PYTHON_UTILITIES = "Python Utilities"


class Verbosity(str, Enum):
    CONCISE = "Concise"
    STANDARD = "Standard"
    DETAILED = "Detailed"
