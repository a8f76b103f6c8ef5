CLIP_COUNT = 4
MIN_CLIP_DURATION_SECONDS = 30
MAX_CLIP_DURATION_SECONDS = 60

SYSTEM_PROMPT = (
    "You are ViralClip AI, a specialized assistant for creating engaging "
    "short-form video content from long-form YouTube videos. "
    "Respond with valid JSON only."
)

USER_PROMPT_TEMPLATE = """Given the YouTube video URL: {url}

Your task is to analyze its potential content and generate {count} distinct, high-impact clips suitable for YouTube Shorts, TikTok, or Instagram Reels. Each clip must be between {min_seconds} and {max_seconds} seconds long.

For each of the {count} clips, provide the following information in a structured JSON format:
- title: a catchy, scroll-stopping title (max 70 characters)
- startTime / endTime: where the clip starts and ends in the video, in MM:SS format
- summary: one sentence explaining why this clip is engaging
- viralityScore: a score from 1.0 to 10.0 for the clip's potential to go viral
- captions: timed caption lines for the clip
- For each caption, provide a precise start and end time in SECONDS relative to the clip start. This is critical for creating dynamic, word-by-word style captions.

Generate the output as a JSON array of {count} clip objects."""

CAPTION_SCHEMA = {
    "type": "object",
    "properties": {
        "startTime": {
            "type": "number",
            "description": "The start time for the caption line in SECONDS (e.g., 5.2).",
        },
        "endTime": {
            "type": "number",
            "description": "The end time for the caption line in SECONDS (e.g., 8.7).",
        },
        "text": {"type": "string", "description": "The text of the caption."},
    },
    "required": ["startTime", "endTime", "text"],
}

CLIP_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "A catchy, scroll-stopping title (max 70 characters).",
        },
        "startTime": {
            "type": "string",
            "description": "The suggested start time of the clip in 'MM:SS' format.",
        },
        "endTime": {
            "type": "string",
            "description": "The suggested end time of the clip in 'MM:SS' format.",
        },
        "summary": {
            "type": "string",
            "description": "A brief, one-sentence summary explaining why this clip is engaging.",
        },
        "viralityScore": {
            "type": "number",
            "description": "A score from 1.0 to 10.0 indicating the clip's potential to go viral.",
        },
        "captions": {
            "type": "array",
            "description": "An array of caption objects, timed precisely for dynamic display.",
            "items": CAPTION_SCHEMA,
        },
    },
    "required": ["title", "startTime", "endTime", "summary", "viralityScore", "captions"],
}

CLIP_LIST_SCHEMA = {"type": "array", "items": CLIP_SCHEMA}


def build_prompt(url: str) -> str:
    return USER_PROMPT_TEMPLATE.format(
        url=url,
        count=CLIP_COUNT,
        min_seconds=MIN_CLIP_DURATION_SECONDS,
        max_seconds=MAX_CLIP_DURATION_SECONDS,
    )
