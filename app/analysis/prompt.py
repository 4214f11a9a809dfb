from __future__ import annotations

from app.analysis.schemas import AnalysisRequest

ANY_SOURCES_FALLBACK = "Any authoritative sources"
NO_DEADLINE_FALLBACK = "Not specified"

SYSTEM_PROMPT = (
    "You are a data research assistant specializing in providing journalists with accurate, "
    "well-sourced data and analysis. Always cite specific, verifiable sources."
)

_USER_PROMPT_TEMPLATE = """You are a data research assistant for journalists. Your task is to provide comprehensive data analysis with verifiable sources.

Story Topic: {story_topic}
Data Needed: {data_needed}
Timeframe: {timeframe}
Preferred Sources: {sources}
Deadline: {deadline}

Please provide:
1. Key statistical findings relevant to the story topic
2. Historical context and benchmarks
3. Expert analysis and insights
4. For EACH data point, provide specific, verifiable sources with:
   - Organization name (e.g., Bureau of Labor Statistics)
   - Report/document title
   - Publication date
   - Relevant URL if available

Format your response clearly with:
- Main findings organized by topic
- Each finding followed by its sources in brackets
- Statistical data with proper context
- Any important caveats or limitations

Focus on accuracy and verifiability. Only cite real, existing sources."""


def build_analysis_prompts(*, analysis_request: AnalysisRequest) -> tuple[str, str]:
    """Create (system_prompt, user_prompt) for analysis generation.

    The wording is fixed; only the request fields vary. Sources keep the caller's order.
    """

    sources = ", ".join(analysis_request.sources) if analysis_request.sources else ANY_SOURCES_FALLBACK
    user_prompt = _USER_PROMPT_TEMPLATE.format(
        story_topic=analysis_request.story_topic,
        data_needed=analysis_request.data_needed,
        timeframe=analysis_request.timeframe,
        sources=sources,
        deadline=analysis_request.deadline or NO_DEADLINE_FALLBACK,
    )
    return SYSTEM_PROMPT, user_prompt
