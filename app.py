"""
Alge-Bro - Your friendly Math & Science buddy

Streamlit application that generates short lessons with Gemini, times the
quiz and practice problems, and tracks a daily learning streak.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st

from algebro.classroom import (
    EmptyTopicError,
    LessonSession,
    ProgressStore,
    TimedAssessment,
    validate_topic,
)
from algebro.config import LOG_FORMAT, LOG_LEVEL, PROBLEMS_TIME_SECONDS, QUIZ_TIME_SECONDS
from algebro.schemas import ActiveTab, Subject, TopicSource
from algebro.services import (
    GeminiClient,
    GenerationError,
    InvalidCredentialError,
    extract_topics_from_file,
    generate_lesson,
    generate_more_examples,
    get_khan_academy_topics,
)
from algebro.viewer import (
    EMPTY_HISTORY_MESSAGE,
    STATUS_CORRECT,
    STATUS_INCORRECT,
    format_countdown,
    get_lesson_css,
    get_quiz_css,
    get_report_css,
    option_status,
    problem_status,
    render_lesson,
    render_lesson_complete,
    render_mistakes,
    render_progress_report,
    render_record,
    render_result_summary,
    render_stat_cards,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Alge-Bro",
    page_icon="🧮",
    layout="centered",
)

SOURCE_LABELS = {
    TopicSource.MANUAL: "Enter Topic",
    TopicSource.UPLOAD: "Upload Syllabus",
    TopicSource.KHAN: "Khan Academy",
}

STATUS_MARKERS = {
    STATUS_CORRECT: "✅ ",
    STATUS_INCORRECT: "❌ ",
}


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "store" not in st.session_state:
        st.session_state.store = ProgressStore()

    if "api_key" not in st.session_state:
        st.session_state.api_key = st.session_state.store.load_api_key()

    if "lesson_session" not in st.session_state:
        st.session_state.lesson_session = LessonSession(st.session_state.store)

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "learn"  # learn, dashboard

    if "topic_source" not in st.session_state:
        st.session_state.topic_source = TopicSource.MANUAL

    if "extracted_topics" not in st.session_state:
        st.session_state.extracted_topics = []

    if "error" not in st.session_state:
        st.session_state.error = None

    if "lesson_nonce" not in st.session_state:
        st.session_state.lesson_nonce = 0

    for key in ("quiz", "problems"):
        if key not in st.session_state:
            st.session_state[key] = None


def get_client() -> GeminiClient:
    return GeminiClient(api_key=st.session_state.api_key)


def handle_generation_error(error: GenerationError):
    """Show the error; send the student back to key entry if the key was rejected."""
    st.session_state.error = str(error)
    if isinstance(error, InvalidCredentialError):
        st.session_state.store.clear_api_key()
        st.session_state.api_key = None


def reset_assessments():
    """Tear down running countdowns before a lesson is replaced."""
    for key in ("quiz", "problems"):
        assessment = st.session_state[key]
        if assessment is not None:
            assessment.cancel()
        st.session_state[key] = None


# -----------------------------------------------------------------------------
# API Key Screen
# -----------------------------------------------------------------------------

def render_api_key_screen():
    """Ask for a Gemini API key before anything else."""
    st.title("Welcome to Alge-Bro!")
    st.markdown("Your friendly Math & Science buddy.")

    st.subheader("Connect Your API Key")
    st.markdown(
        "To start generating lessons, you'll need a Google AI API key. "
        "It is stored only on this computer."
    )

    api_key = st.text_input("Gemini API key", type="password")
    if st.button("Save API Key", type="primary", use_container_width=True):
        try:
            if st.session_state.store.save_api_key(api_key):
                st.session_state.api_key = api_key.strip()
                st.session_state.error = None
                st.rerun()
            else:
                st.session_state.error = "Could not save the API key. Please try again."
        except ValueError as e:
            st.session_state.error = str(e)

    if st.session_state.error:
        st.error(st.session_state.error)


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with progress summary and view switch."""
    st.sidebar.title("🧮 Alge-Bro")

    stats = st.session_state.lesson_session.stats
    st.sidebar.markdown(f"""
    **Streak:** 🔥 {stats.current_streak} days (best {stats.longest_streak})

    **Lessons:** {stats.lessons_completed} · **Average:** {stats.average_score}%
    """)

    st.sidebar.divider()

    view_mode = st.sidebar.radio(
        "View",
        ["Learn", "Dashboard"],
        index=["learn", "dashboard"].index(st.session_state.view_mode),
        horizontal=True,
    )
    st.session_state.view_mode = view_mode.lower()

    st.sidebar.divider()
    if st.sidebar.button("Change API key"):
        st.session_state.store.clear_api_key()
        st.session_state.api_key = None
        st.rerun()


# -----------------------------------------------------------------------------
# Topic Selection
# -----------------------------------------------------------------------------

def render_topic_picker():
    """Subject, topic source and topic entry."""
    session = st.session_state.lesson_session

    subjects = list(Subject)
    subject = st.radio(
        "Subject",
        subjects,
        index=subjects.index(session.subject),
        format_func=lambda s: s.value,
        horizontal=True,
    )
    if subject != session.subject:
        reset_assessments()
        session.change_subject(subject)
        st.session_state.extracted_topics = []
        st.session_state.error = None

    sources = list(TopicSource)
    st.session_state.topic_source = st.radio(
        "Topic source",
        sources,
        index=sources.index(st.session_state.topic_source),
        format_func=SOURCE_LABELS.get,
        horizontal=True,
        label_visibility="collapsed",
    )

    source = st.session_state.topic_source
    if source == TopicSource.MANUAL:
        col1, col2 = st.columns([3, 1])
        with col1:
            topic = st.text_input(
                "Topic",
                placeholder="e.g., Photosynthesis",
                label_visibility="collapsed",
            )
        with col2:
            if st.button("✨ Generate Lesson", type="primary", use_container_width=True):
                handle_generate_lesson(topic)

    elif source == TopicSource.UPLOAD:
        uploaded = st.file_uploader("Choose a syllabus file (PDF, TXT)", type=["pdf", "txt", "md"])
        if uploaded is not None and st.button("Find Topics"):
            handle_file_upload(uploaded)

    elif source == TopicSource.KHAN:
        st.markdown(
            f"Get a list of 7th grade {session.subject.value} topics "
            "from the Khan Academy curriculum."
        )
        if st.button("Load Khan Academy Topics"):
            handle_khan_topics()

    if st.session_state.extracted_topics:
        st.markdown("**Select a Topic:**")
        cols = st.columns(2)
        for i, topic in enumerate(st.session_state.extracted_topics):
            with cols[i % 2]:
                if st.button(topic, key=f"topic_{i}", use_container_width=True):
                    handle_generate_lesson(topic)


def handle_generate_lesson(topic: str):
    session = st.session_state.lesson_session
    try:
        topic = validate_topic(topic)
    except EmptyTopicError as e:
        st.session_state.error = str(e)
        return

    st.session_state.error = None
    reset_assessments()
    session.clear_lesson()
    try:
        with st.spinner("Creating your lesson..."):
            lesson = generate_lesson(topic, session.subject, get_client())
        session.start_lesson(lesson)
        st.session_state.lesson_nonce += 1
    except GenerationError as e:
        handle_generation_error(e)
    finally:
        st.session_state.extracted_topics = []
    st.rerun()


def handle_file_upload(uploaded):
    st.session_state.error = None
    st.session_state.extracted_topics = []
    try:
        with st.spinner("Reading your syllabus..."):
            st.session_state.extracted_topics = extract_topics_from_file(
                uploaded.getvalue(),
                uploaded.type or "application/octet-stream",
                st.session_state.lesson_session.subject,
                get_client(),
            )
    except GenerationError as e:
        handle_generation_error(e)


def handle_khan_topics():
    st.session_state.error = None
    st.session_state.extracted_topics = []
    try:
        with st.spinner("Fetching topics..."):
            st.session_state.extracted_topics = get_khan_academy_topics(
                st.session_state.lesson_session.subject,
                get_client(),
            )
    except GenerationError as e:
        handle_generation_error(e)


# -----------------------------------------------------------------------------
# Lesson View
# -----------------------------------------------------------------------------

def render_tab_bar():
    """Lesson / Quiz / Problems switch. Problems unlock after the quiz."""
    session = st.session_state.lesson_session
    labels = {
        ActiveTab.LESSON: "📖 Lesson",
        ActiveTab.QUIZ: "❓ Quiz",
        ActiveTab.PROBLEMS: "🏃 Problems",
    }
    cols = st.columns(len(labels))
    for col, (tab, label) in zip(cols, labels.items()):
        with col:
            disabled = tab == ActiveTab.PROBLEMS and not session.problems_unlocked
            if st.button(
                label,
                key=f"tab_{tab.value}",
                disabled=disabled,
                type="primary" if session.active_tab == tab else "secondary",
                use_container_width=True,
            ):
                session.active_tab = tab
                st.rerun()


def render_lesson_view():
    """Render the main learning page."""
    st.title("Alge-Bro")
    session = st.session_state.lesson_session
    st.caption(f"Your friendly {session.subject.value} buddy.")

    render_topic_picker()

    if st.session_state.error:
        st.error(f"**Oops! Something went wrong.** {st.session_state.error}")

    lesson = session.lesson
    if lesson is None:
        return

    st.divider()
    st.header(lesson.topic)
    render_tab_bar()

    if session.is_complete:
        st.markdown(get_quiz_css(), unsafe_allow_html=True)
        st.markdown(
            render_lesson_complete(session.quiz_result, session.problems_result),
            unsafe_allow_html=True,
        )

    if session.active_tab == ActiveTab.LESSON:
        render_lesson_tab()
    elif session.active_tab == ActiveTab.QUIZ:
        render_quiz_tab()
    elif session.active_tab == ActiveTab.PROBLEMS:
        render_problems_tab()


def render_lesson_tab():
    session = st.session_state.lesson_session
    st.markdown(get_lesson_css(), unsafe_allow_html=True)
    st.markdown(render_lesson(session.lesson), unsafe_allow_html=True)

    if st.button("I need another example"):
        try:
            with st.spinner("Thinking..."):
                examples = generate_more_examples(
                    session.lesson.topic,
                    session.subject,
                    session.lesson.core_concept.real_world_examples,
                    get_client(),
                )
            session.add_examples(examples)
        except GenerationError as e:
            handle_generation_error(e)
        st.rerun()


# -----------------------------------------------------------------------------
# Timed Assessments
# -----------------------------------------------------------------------------

def get_assessment(key: str) -> TimedAssessment:
    """Start the countdown the first time a tab is opened for this lesson."""
    session = st.session_state.lesson_session
    if st.session_state[key] is None:
        if key == "quiz":
            assessment = TimedAssessment(
                session.lesson.quiz.questions,
                QUIZ_TIME_SECONDS,
                on_submit=session.complete_quiz,
            )
        else:
            assessment = TimedAssessment(
                session.lesson.practice_problems.problems,
                PROBLEMS_TIME_SECONDS,
                on_submit=session.complete_problems,
            )
        st.session_state[key] = assessment
        st.session_state[f"{key}_last_tick"] = time.monotonic()
    return st.session_state[key]


@st.fragment(run_every=1)
def render_countdown(key: str):
    """Poll loop: turn elapsed wall-clock time into countdown ticks."""
    assessment = st.session_state[key]
    if assessment is None or not assessment.running:
        return

    now = time.monotonic()
    last = st.session_state[f"{key}_last_tick"]
    elapsed = int(now - last)
    if elapsed > 0:
        st.session_state[f"{key}_last_tick"] = last + elapsed
        assessment.advance(elapsed)

    if assessment.submitted:
        st.rerun()
    st.markdown(
        f'<div class="quiz-timer">Time Left: {format_countdown(assessment.time_left)}</div>',
        unsafe_allow_html=True,
    )


def render_quiz_tab():
    session = st.session_state.lesson_session
    quiz = session.lesson.quiz
    assessment = get_assessment("quiz")
    nonce = st.session_state.lesson_nonce

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.subheader(quiz.title)
    render_countdown("quiz")

    for q_index, question in enumerate(quiz.questions):
        st.markdown(f"**{q_index + 1}. {question.question_text}**")
        choice = st.radio(
            f"Question {q_index + 1}",
            list(range(len(question.options))),
            index=assessment.answers[q_index],
            format_func=lambda i, options=question.options: options[i],
            key=f"quiz_{nonce}_{q_index}",
            disabled=not assessment.running,
            label_visibility="collapsed",
        )
        if choice is not None:
            assessment.set_answer(q_index, choice)

        if assessment.submitted:
            answer = assessment.answers[q_index]
            lines = []
            for o_index, option in enumerate(question.options):
                status = option_status(question, o_index, answer, submitted=True)
                if status in STATUS_MARKERS:
                    lines.append(f"{STATUS_MARKERS[status]}{option}")
            st.markdown("  \n".join(lines))

    if assessment.submitted:
        st.markdown(render_result_summary("Quiz", assessment.result), unsafe_allow_html=True)
        st.markdown(render_mistakes(assessment.result.mistakes), unsafe_allow_html=True)
    elif st.button("Check Answers", type="primary", key=f"quiz_submit_{nonce}"):
        assessment.submit()
        st.rerun()


def render_problems_tab():
    session = st.session_state.lesson_session
    problems = session.lesson.practice_problems
    assessment = get_assessment("problems")
    nonce = st.session_state.lesson_nonce

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.subheader(problems.title)
    render_countdown("problems")

    for p_index, problem in enumerate(problems.problems):
        st.markdown(f"**{p_index + 1}. {problem.problem_text}**")
        value = st.text_input(
            f"Answer {p_index + 1}",
            value=assessment.answers[p_index],
            placeholder="Type your answer here",
            key=f"problem_{nonce}_{p_index}",
            disabled=not assessment.running,
            label_visibility="collapsed",
        )
        assessment.set_answer(p_index, value)

        if assessment.submitted:
            answer = assessment.answers[p_index]
            status = problem_status(problem, answer, submitted=True)
            st.markdown(f"Correct Answer: **{problem.answer}**")
            if status == STATUS_INCORRECT:
                shown = answer or '""'
                st.markdown(f"❌ Your answer: `{shown}`")

    if assessment.submitted:
        st.markdown(render_result_summary("Problems", assessment.result), unsafe_allow_html=True)
    elif st.button("Check Answers", type="primary", key=f"problems_submit_{nonce}"):
        assessment.submit()
        st.rerun()


# -----------------------------------------------------------------------------
# Dashboard View
# -----------------------------------------------------------------------------

def render_dashboard_view():
    """Progress dashboard with history and report export."""
    st.title("My Progress Dashboard")

    session = st.session_state.lesson_session
    progress = session.progress
    stats = session.refresh_stats()

    st.markdown(get_report_css(), unsafe_allow_html=True)
    st.markdown(render_stat_cards(stats), unsafe_allow_html=True)

    st.subheader("Recent Activity")
    if not progress.records:
        st.info(EMPTY_HISTORY_MESSAGE)
    for record in reversed(progress.records):
        st.markdown(render_record(record, include_mistakes=False), unsafe_allow_html=True)
        if record.mistakes:
            with st.expander(f"Review {len(record.mistakes)} Mistake(s)"):
                st.markdown(get_quiz_css(), unsafe_allow_html=True)
                st.markdown(render_mistakes(record.mistakes), unsafe_allow_html=True)

    st.divider()
    st.download_button(
        "Generate Sharable Report",
        data=render_progress_report(progress, stats),
        file_name="algebro_progress_report.html",
        mime="text/html",
        type="primary",
    )


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    if not st.session_state.api_key:
        render_api_key_screen()
        return

    render_sidebar()

    if st.session_state.view_mode == "learn":
        render_lesson_view()
    elif st.session_state.view_mode == "dashboard":
        render_dashboard_view()


if __name__ == "__main__":
    main()
