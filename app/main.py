"""
Streamlit Frontend for the Habit Tracker

Renders today's habits and the habit/category forms. All rules live in the
store, validator and flows; this page only collects input and shows
messages.
"""

import html

import streamlit as st

from src.models.form import HabitFormData, ValidationResult
from src.models.habit import WEEK_DAYS, Category, Frequency, Habit
from src.orchestrator import DashboardQuery, HabitFormFlow, create_app_components
from src.services.storage import InMemoryStorage, StorageError
from src.store import HabitStore


st.set_page_config(
    page_title="Daily Habits",
    page_icon="✅",
    layout="centered",
)

DAY_LABELS = {day_id: short for day_id, _, short in WEEK_DAYS}


@st.cache_resource
def get_components() -> tuple[HabitStore, HabitFormFlow, DashboardQuery]:
    """Get or create application components (cached)."""
    try:
        return create_app_components()
    except StorageError as e:
        st.error(f"Local storage unavailable, changes will not be saved: {e}")
        return create_app_components(storage=InMemoryStorage())


def main():
    """Main application entry point."""
    store, habit_flow, dashboard_query = get_components()

    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None
    if "flash" not in st.session_state:
        st.session_state.flash = None

    page = st.sidebar.radio("Navigate to:", ["Today", "Categories"], index=0)

    if st.session_state.flash:
        st.toast(st.session_state.flash)
        st.session_state.flash = None

    if page == "Today":
        render_today_page(store, habit_flow, dashboard_query)
    else:
        render_categories_page(store, habit_flow)


def render_today_page(store: HabitStore, habit_flow: HabitFormFlow, dashboard_query: DashboardQuery):
    """Stats, today's habit cards and the add/edit form."""
    dashboard = dashboard_query.build()

    st.title("Daily Habits")
    st.caption(dashboard.display_date)

    col1, col2, col3 = st.columns(3)
    col1.metric("Habits", dashboard.total)
    col2.metric("Done", dashboard.completed_count)
    col3.metric("Rate", f"{dashboard.completion_rate}%")

    if dashboard.is_empty:
        st.info("No habits today. Ready to start your habit journey?")

    for entry in dashboard.entries:
        habit = entry.habit
        with st.container(border=True):
            left, middle, right = st.columns([1, 6, 2])
            done = left.checkbox(
                "done",
                value=entry.completed,
                key=f"done-{habit.id}-{dashboard.date}",
                label_visibility="collapsed",
            )
            if done != entry.completed:
                _, message = habit_flow.toggle(habit.id, dashboard.date)
                st.session_state.flash = message or None
                st.rerun()

            title = f"~~{habit.title}~~" if entry.completed else f"**{habit.title}**"
            middle.markdown(f"{title}  \n:gray[{entry.category.name}] · {_schedule_label(habit)}")
            if habit.description:
                middle.caption(habit.description)

            if right.button("Edit", key=f"edit-{habit.id}"):
                st.session_state.editing_id = habit.id
                st.rerun()
            if right.button("Delete", key=f"delete-{habit.id}"):
                st.session_state.flash = habit_flow.delete(habit.id)
                st.rerun()

    if dashboard.is_perfect_day:
        st.success("🎉 Perfect Day! All habits completed.")

    st.divider()
    render_habit_form(store, habit_flow)


def render_habit_form(store: HabitStore, habit_flow: HabitFormFlow):
    editing = store.get_habit(st.session_state.editing_id) if st.session_state.editing_id else None
    categories = store.categories
    category_ids = [c.id for c in categories]
    names = {c.id: c.name for c in categories}

    st.subheader("Edit Habit" if editing else "Add New Habit")
    with st.form("habit-form", clear_on_submit=True):
        title = st.text_input("Title", value=editing.title if editing else "")
        description = st.text_area(
            "Description (optional)",
            value=(editing.description or "") if editing else "",
        )
        default_category = editing.category_id if editing and editing.category_id in category_ids else None
        category_id = st.selectbox(
            "Category",
            category_ids,
            index=category_ids.index(default_category) if default_category else 0,
            format_func=lambda cid: names[cid],
        )
        frequency = st.radio(
            "Frequency",
            [Frequency.DAILY.value, Frequency.WEEKLY.value],
            index=1 if editing and editing.frequency == Frequency.WEEKLY else 0,
            horizontal=True,
        )
        week_days = st.multiselect(
            "Days (weekly only)",
            list(DAY_LABELS),
            default=(editing.week_days or []) if editing else [],
            format_func=lambda d: DAY_LABELS[d],
        )
        submitted = st.form_submit_button("Update Habit" if editing else "Add Habit")

    if editing and st.button("Cancel editing"):
        st.session_state.editing_id = None
        st.rerun()

    if submitted:
        form = HabitFormData(
            title=title,
            description=description,
            category_id=category_id,
            frequency=Frequency(frequency),
            week_days=week_days,
        )
        result, habit_id, message = habit_flow.submit(
            form, editing_id=editing.id if editing else None
        )
        if not result.is_valid:
            st.error(message)
            return
        st.session_state.editing_id = None
        st.session_state.flash = _submission_message(message, result)
        st.rerun()


def render_categories_page(store: HabitStore, habit_flow: HabitFormFlow):
    st.title("Categories")

    for category in store.categories:
        with st.container(border=True):
            left, right = st.columns([5, 1])
            left.markdown(_category_label(category), unsafe_allow_html=True)
            if right.button("Delete", key=f"delete-cat-{category.id}"):
                if store.delete_category(category.id):
                    st.session_state.flash = f'"{category.name}" deleted, its habits were moved.'
                else:
                    st.session_state.flash = "The last category cannot be deleted."
                st.rerun()

    st.subheader("Add Category")
    with st.form("category-form", clear_on_submit=True):
        name = st.text_input("Name")
        color = st.color_picker("Color", value="#3b82f6")
        if st.form_submit_button("Add Category"):
            result, _ = habit_flow.add_category(name, color)
            if not result.is_valid:
                st.error(result.issues[0].message)
            else:
                st.session_state.flash = f'Category "{name.strip()}" added.'
                st.rerun()


def _submission_message(message: str, result: ValidationResult) -> str:
    """Success message followed by any warnings, shown after the rerun."""
    return "\n\n".join([message] + [w.message for w in result.warnings])


def _category_label(category: Category) -> str:
    return (
        f"<span style='color:{html.escape(category.color)}'>●</span> "
        f"**{html.escape(category.name)}**"
    )


def _schedule_label(habit: Habit) -> str:
    if habit.frequency == Frequency.DAILY:
        return "Daily"
    days = ", ".join(DAY_LABELS[d] for d in habit.week_days or [])
    return f"Weekly: {days}" if days else "Weekly"


if __name__ == "__main__":
    main()
