from kivy.metrics import dp
from kivy.uix.behaviors import ButtonBehavior
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDIconButton
from kivymd.uix.label import MDLabel

from backend import CATEGORY_LABELS

CATEGORY_ICONS = {
    "warmup": "weather-sunny",
    "main": "target",
    "cooldown": "weather-night",
}


class ExerciseRow(ButtonBehavior, MDBoxLayout):
    """One exercise with its set circles.

    Tapping the row checks (or clears) every set; tapping a circle toggles
    that set only. A finished exercise collapses its circles into a single
    check mark.
    """

    def __init__(self, session, exercise, on_swap, **kwargs):
        super().__init__(
            orientation="horizontal",
            padding=(dp(8), dp(6)),
            spacing=dp(6),
            size_hint_y=None,
            height=dp(64),
            **kwargs,
        )
        self.session = session
        self.exercise = exercise
        self.bind(on_release=lambda *_: session.toggle_all_sets(exercise.id))

        self.add_widget(
            MDIconButton(
                icon="swap-horizontal",
                on_release=lambda *_: on_swap(exercise),
            )
        )

        is_next = exercise.id == session.next_exercise_id
        text_box = MDBoxLayout(orientation="vertical")
        name = f"[b]{exercise.name}[/b]" if is_next else exercise.name
        text_box.add_widget(MDLabel(text=name, markup=True, shorten=True, max_lines=1))
        info = exercise.info
        label = session.progress_label(exercise.id)
        if label:
            info = f"{info} - {label}" if info else label
        text_box.add_widget(MDLabel(text=info, theme_text_color="Secondary", font_style="Caption"))
        self.add_widget(text_box)

        self.add_widget(self._build_sets())

    def _build_sets(self):
        sets = self.session.sets_for(self.exercise.id)
        row = MDBoxLayout(orientation="horizontal", size_hint_x=None, spacing=dp(2))
        if all(sets):
            row.add_widget(MDIconButton(icon="check-circle", disabled=True))
            row.width = dp(48)
            return row
        highlight = self.session.next_set_index(self.exercise.id)
        for index, done in enumerate(sets):
            if done:
                icon = "circle"
            elif index == highlight:
                icon = "circle-double"
            else:
                icon = "circle-outline"
            row.add_widget(
                MDIconButton(
                    icon=icon,
                    on_release=lambda _btn, i=index: self.session.toggle_set(
                        self.exercise.id, i
                    ),
                )
            )
        row.width = dp(48) * len(sets)
        return row


class CategoryHeader(ButtonBehavior, MDBoxLayout):
    pass


class CategoryCard(MDBoxLayout):
    """Collapsible group of exercises for one category."""

    def __init__(self, session, category: str, on_swap, **kwargs):
        super().__init__(orientation="vertical", size_hint_y=None, spacing=dp(2), **kwargs)
        self.bind(minimum_height=self.setter("height"))
        self.session = session
        self.category = category

        members = session.exercises_in(category)
        done = session.category_done(category)
        collapsed = session.is_collapsed(category)

        header = CategoryHeader(
            orientation="horizontal",
            padding=(dp(16), dp(8)),
            size_hint_y=None,
            height=dp(48),
        )
        header.bind(on_release=lambda *_: session.toggle_collapsed(category))
        header.add_widget(
            MDIconButton(
                icon="check-decagram" if done else CATEGORY_ICONS.get(category, "circle"),
                disabled=True,
            )
        )
        header.add_widget(
            MDLabel(
                text=(
                    f"{CATEGORY_LABELS.get(category, category)} · "
                    f"{session.category_completed_count(category)}/{len(members)}"
                )
            )
        )
        header.add_widget(
            MDIconButton(
                icon="chevron-down" if collapsed else "chevron-up",
                on_release=lambda *_: session.toggle_collapsed(category),
            )
        )
        self.add_widget(header)

        if not collapsed:
            for exercise in members:
                self.add_widget(ExerciseRow(session, exercise, on_swap))
