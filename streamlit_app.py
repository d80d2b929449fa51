"""Streamlit Web UI for RefineLab.

Four modes:
  A) Editor: write a draft with live metrics and writing suggestions
  B) Essays: stored essays with AI feedback, grade prediction and past grades
  C) Compare: AI comparison of two essay versions
  D) Lessons: the writing lesson library
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets into os.environ so the API client can read it
if "ANTHROPIC_API_KEY" not in os.environ:
    try:
        os.environ["ANTHROPIC_API_KEY"] = st.secrets["ANTHROPIC_API_KEY"]
    except Exception:
        pass

from refinelab.analyzer import compute_metrics, detect_issues
from refinelab.clients.llm_client import LLMClient
from refinelab.config import load_config
from refinelab.editor.session import EditorSession
from refinelab.lessons import categories, list_lessons, recommend_lessons
from refinelab.pipeline.orchestrator import FeedbackPipeline
from refinelab.store.essay_store import EssayStore

SEVERITY_ICONS = {"high": ":red_circle:", "medium": ":large_yellow_circle:", "low": ":large_blue_circle:"}

st.set_page_config(page_title="RefineLab", page_icon=":memo:", layout="wide")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@st.cache_resource
def _get_store() -> EssayStore:
    return EssayStore(load_config().store.resolved_db_path)


def _get_pipeline() -> FeedbackPipeline:
    config = load_config()
    try:
        llm = LLMClient.from_config(config.llm)
    except Exception as e:
        raise RuntimeError(f"Could not create the AI client. Check ANTHROPIC_API_KEY: {e}") from e
    return FeedbackPipeline(llm, _get_store())


def _essay_options() -> dict[str, str]:
    return {f"{e.title} ({e.created_at:%Y-%m-%d %H:%M})": e.id for e in _get_store().list_essays(limit=100)}


def _render_analysis(analysis) -> None:
    cols = st.columns(4)
    for i, (name, value) in enumerate(analysis.metrics.model_dump().items()):
        cols[i % 4].metric(name.replace("_", " ").capitalize(), f"{value:.0%}")
    left, right = st.columns(2)
    with left:
        st.subheader("Strengths")
        for item in analysis.strengths:
            st.markdown(f"- {item}")
    with right:
        st.subheader("Weaknesses")
        for item in analysis.weaknesses:
            st.markdown(f"- {item}")
    if analysis.strategic_suggestions:
        st.subheader("Strategic suggestions")
        for item in analysis.strategic_suggestions:
            st.markdown(f"- {item}")
    for para in analysis.paragraph_analysis:
        with st.expander(f"Paragraph {para.paragraph_number}: {', '.join(para.tags)}"):
            st.caption(para.excerpt)
            st.write(para.feedback)


# ---------------------------------------------------------------------------
# Mode A: Editor
# ---------------------------------------------------------------------------


def _mode_editor() -> None:
    config = load_config()
    store = _get_store()
    options = _essay_options()
    if not options:
        st.info("No essays yet. Add one from the Essays page.")
        return

    label = st.selectbox("Essay", list(options))
    essay_id = options[label]
    session: EditorSession | None = st.session_state.get("editor_session")
    if session is None or session.essay_id != essay_id:
        session = EditorSession.open(store, essay_id, config)
        st.session_state.editor_session = session
        st.session_state.editor_title = session.draft.title
        st.session_state.editor_content = session.draft.content

    editor_col, side_col = st.columns([3, 2])

    with editor_col:
        title = st.text_input("Title", key="editor_title")
        content = st.text_area("Draft", key="editor_content", height=500)
        if st.button("Save", type="primary"):
            if asyncio.run(session.commit(title, content)):
                st.success("Essay saved successfully!")
            else:
                st.error(session.last_error)
        if session.last_saved:
            st.caption(f"Last saved {session.last_saved:%H:%M:%S}")

    # Streamlit reruns on commit of the text area, so analysis runs once per committed edit
    metrics = compute_metrics(content, config.analyzer)
    suggestions = detect_issues(content, config.analyzer)

    with side_col:
        st.subheader("Live metrics")
        a, b, c = st.columns(3)
        a.metric("Words", metrics.word_count)
        b.metric("Sentences", metrics.sentence_count)
        c.metric("Paragraphs", metrics.paragraph_count)
        a.metric("Words / sentence", f"{metrics.avg_words_per_sentence:.1f}")
        b.metric("Vocabulary", f"{metrics.vocabulary_diversity}%")
        c.metric("Academic tone", f"{metrics.academic_tone}%")
        a.metric("Transitions", metrics.transition_words)
        b.metric("Reading level", metrics.reading_level)
        c.metric("Read time", f"{metrics.estimated_read_time} min")

        st.subheader(f"Suggestions ({len(suggestions)})")
        if not suggestions:
            st.caption("No suggestions. Keep writing!")
        for s in suggestions:
            text = f"{SEVERITY_ICONS[s.severity]} **{s.category}** {s.message}"
            if s.has_span:
                text += f"\n\n> {content[s.start:s.end].strip()[:120]}"
            st.markdown(text)

        if session.revisions:
            st.subheader("Recent saves")
            for marker in reversed(session.revisions[-5:]):
                st.caption(f"{marker.timestamp:%H:%M:%S} · {marker.word_count} words")


# ---------------------------------------------------------------------------
# Mode B: Essays
# ---------------------------------------------------------------------------


def _mode_essays() -> None:
    store = _get_store()

    with st.expander("Add essay", expanded=False):
        title = st.text_input("Title", key="new_title")
        assignment = st.text_input("Assignment (optional)", key="new_assignment")
        content = st.text_area("Essay text", key="new_content", height=250)
        if st.button("Save and get feedback", type="primary", disabled=not (title and content)):
            with st.spinner("Analyzing essay..."):
                try:
                    asyncio.run(_get_pipeline().submit(title, content, assignment or None))
                except Exception:
                    logger.exception("Essay analysis failed")
                    st.error("Something went wrong. Please try again shortly.")
                    return
            st.rerun()

    options = _essay_options()
    if not options:
        st.info("No essays yet.")
        return
    label = st.selectbox("Essay", list(options), key="essays_select")
    essay = store.get(options[label])

    if essay.analysis is None:
        st.caption("No AI feedback yet.")
    else:
        _render_analysis(essay.analysis)
        st.subheader("Recommended lessons")
        for lesson in recommend_lessons(essay.analysis.metrics):
            st.markdown(f"- **{lesson.title}** ({lesson.category})")
        _grade_tools(essay.id)

    left, right = st.columns(2)
    if left.button("Refresh AI feedback"):
        with st.spinner("Analyzing essay..."):
            try:
                asyncio.run(_get_pipeline().analyze(essay.id))
            except Exception:
                logger.exception("Essay analysis failed")
                st.error("Something went wrong. Please try again shortly.")
                return
        st.rerun()
    if right.button("Delete essay"):
        store.delete(essay.id)
        st.rerun()

    trend = store.metric_trend()
    if len(trend) > 1:
        st.subheader("Metric trends")
        st.line_chart(
            {
                name: [getattr(p.metrics, name) for p in trend]
                for name in ("thesis_clarity", "argument_depth", "logical_progression")
            }
        )

    _record_grade()


def _run_pipeline(label: str, spinner: str, call):
    with st.spinner(spinner):
        try:
            return asyncio.run(call(_get_pipeline()))
        except ValueError as e:
            st.warning(str(e))
        except Exception:
            logger.exception("%s failed", label)
            st.error("Something went wrong. Please try again shortly.")
    return None


def _grade_tools(essay_id: str) -> None:
    left, right = st.columns(2)
    if left.button("Predict grade"):
        prediction = _run_pipeline(
            "Grade prediction", "Predicting grade...", lambda p: p.predict_grade(essay_id)
        )
        if prediction is not None:
            left.metric(
                "Predicted grade",
                prediction.predicted_grade_band,
                f"{prediction.confidence:.0%} confidence",
                delta_color="off",
            )
            for item in prediction.key_factors:
                left.markdown(f"- {item}")
    if right.button("Refresh strategic suggestions"):
        items = _run_pipeline(
            "Strategy suggestions", "Thinking about strategies...", lambda p: p.suggest_strategies(essay_id)
        )
        if items is not None:
            st.rerun()


def _record_grade() -> None:
    with st.expander("Past grades", expanded=False):
        store = _get_store()
        assignment = st.text_input("Assignment", key="grade_assignment")
        grade = st.text_input("Grade received", key="grade_value")
        penalties = st.text_input("Areas you lost marks for (comma separated)", key="grade_penalties")
        if st.button("Record grade", disabled=not (assignment and grade)):
            store.add_grading_pattern(
                assignment,
                grade,
                penalty_areas=[p.strip() for p in penalties.split(",") if p.strip()],
            )
            st.rerun()
        for p in store.list_grading_patterns():
            st.caption(f"{p.assignment_name}: {p.grade} · {', '.join(p.penalty_areas) or 'no penalties noted'}")


# ---------------------------------------------------------------------------
# Mode C: Compare
# ---------------------------------------------------------------------------


def _mode_compare() -> None:
    options = _essay_options()
    if len(options) < 2:
        st.info("Add at least two essays to compare versions.")
        return
    labels = list(options)
    before = st.selectbox("Before", labels, index=min(1, len(labels) - 1))
    after = st.selectbox("After", labels, index=0)
    if before == after:
        st.warning("Pick two different essays.")
        return
    if st.button("Compare", type="primary"):
        with st.spinner("Comparing versions..."):
            try:
                result = asyncio.run(_get_pipeline().compare(options[before], options[after]))
            except Exception:
                logger.exception("Essay comparison failed")
                st.error("Something went wrong. Please try again shortly.")
                return
        cols = st.columns(5)
        for col, (name, delta) in zip(cols, (
            ("Clarity", result.clarity_delta),
            ("Coherence", result.coherence_delta),
            ("Structure", result.structure_delta),
            ("Argument", result.argument_delta),
            ("Analysis", result.analysis_delta),
        )):
            col.metric(name, f"{delta:+.0%}")
        for item in result.improvements:
            st.markdown(f"- {item}")


# ---------------------------------------------------------------------------
# Mode D: Lessons
# ---------------------------------------------------------------------------


def _mode_lessons() -> None:
    category = st.selectbox("Category", ["All", *categories()])
    for lesson in list_lessons(None if category == "All" else category):
        with st.expander(f"{lesson.title} ({lesson.category})"):
            st.markdown("**Principles**")
            for item in lesson.principles:
                st.markdown(f"- {item}")
            st.markdown("**Strategies**")
            for item in lesson.strategies:
                st.markdown(f"- {item}")
            st.markdown("**Checklist**")
            for i, item in enumerate(lesson.checklist_items):
                st.checkbox(item, key=f"check_{lesson.id}_{i}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("RefineLab")
    st.caption("Feedback, not rewrites")
    mode = st.radio("Mode", ["Editor", "Essays", "Compare", "Lessons"], index=0)

if mode == "Editor":
    _mode_editor()
elif mode == "Essays":
    _mode_essays()
elif mode == "Compare":
    _mode_compare()
else:
    _mode_lessons()
