"""Advisory: prompt builder and Gemini client with placeholder fallback."""
