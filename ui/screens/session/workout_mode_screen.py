import logging

from kivy.metrics import dp
from kivy.properties import BooleanProperty, NumericProperty, ObjectProperty, StringProperty
from kivymd.app import MDApp
from kivymd.uix.boxlayout import MDBoxLayout
from kivymd.uix.button import MDFlatButton, MDRaisedButton
from kivymd.uix.dialog import MDDialog
from kivymd.uix.label import MDLabel
from kivymd.uix.list import MDList, OneLineListItem, TwoLineListItem
from kivymd.uix.screen import MDScreen

from backend.alternatives import get_alternatives
from ui.category_card import CategoryCard


class SwapExerciseDialog(MDDialog):
    """Pick an alternative for ``exercise`` and confirm the swap."""

    def __init__(self, exercise, on_swap, **kwargs):
        self.exercise = exercise
        self.on_swap = on_swap
        self.selected = None

        box = MDBoxLayout(orientation="vertical", size_hint_y=None, spacing=dp(4))
        box.bind(minimum_height=box.setter("height"))
        box.add_widget(
            MDLabel(
                text=f"Current: {exercise.name} ({exercise.info})",
                size_hint_y=None,
                height=dp(32),
            )
        )
        options = MDList()
        self._items = []
        for alt in get_alternatives(exercise):
            item = TwoLineListItem(
                text=alt.name,
                secondary_text=alt.info,
                on_release=lambda inst, a=alt: self._select(inst, a),
            )
            self._items.append(item)
            options.add_widget(item)
        box.add_widget(options)

        self.swap_button = MDRaisedButton(text="Swap", disabled=True, on_release=self._confirm)
        super().__init__(
            title="Swap Exercise",
            type="custom",
            content_cls=box,
            buttons=[
                MDFlatButton(text="Cancel", on_release=lambda *_: self.dismiss()),
                self.swap_button,
            ],
            **kwargs,
        )

    def _select(self, item, alternative):
        self.selected = alternative
        for other in self._items:
            other.bg_color = (0, 0, 0, 0)
        item.bg_color = (0.2, 0.6, 0.3, 0.3)
        self.swap_button.disabled = False

    def _confirm(self, *_):
        if self.selected is not None:
            self.on_swap(self.exercise, self.selected)
        self.dismiss()


class WorkoutModeScreen(MDScreen):
    """Screen for checking off the sets of the running workout.

    The screen holds no progress of its own. It listens to the app's
    :class:`~backend.workout_session.WorkoutSession` and rebuilds the
    category cards whenever the session changes.
    """

    title = StringProperty("")
    subtitle = StringProperty("")
    progress_text = StringProperty("0/0 sets")
    progress_percent = NumericProperty(0)
    complete = BooleanProperty(False)
    finish_disabled = BooleanProperty(True)
    category_list = ObjectProperty(None)
    notes_field = ObjectProperty(None)
    mention_list = ObjectProperty(None)
    session = None

    def on_pre_enter(self, *args):
        app = MDApp.get_running_app()
        session = app.workout_session if app else None
        workout = app.workout if app else None
        self.subtitle = workout.subtitle if workout else ""
        if session is not self.session:
            if self.session:
                self.session.remove_listener(self.refresh)
            self.session = session
            if session:
                session.add_listener(self.refresh)
        if self.notes_field and session:
            self.notes_field.text = session.notes
        self.refresh()
        return super().on_pre_enter(*args)

    def on_leave(self, *args):
        if self.session:
            self.session.remove_listener(self.refresh)
            self.session = None
        return super().on_leave(*args)

    # ------------------------------------------------------------------
    def refresh(self, *_):
        session = self.session
        if not session:
            return
        self.title = session.title
        self.progress_text = f"{session.completed_sets_count}/{session.total_sets} sets"
        self.progress_percent = session.progress_percent
        self.complete = session.all_complete
        self.finish_disabled = not session.can_finish
        if self.category_list:
            self.category_list.clear_widgets()
            for category in session.categories:
                self.category_list.add_widget(
                    CategoryCard(session, category, on_swap=self.open_swap_dialog)
                )
        self._show_mentions(session.mention)

    def open_swap_dialog(self, exercise):
        dialog = SwapExerciseDialog(exercise, on_swap=self._swap)
        dialog.open()

    def _swap(self, exercise, alternative):
        if self.session:
            self.session.swap_exercise(exercise.id, alternative)

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------
    def on_notes_text(self, text: str):
        if self.session and text != self.session.notes:
            self._show_mentions(self.session.update_notes(text))

    def _show_mentions(self, mention):
        if not self.mention_list:
            return
        self.mention_list.clear_widgets()
        if not mention:
            return
        for exercise in mention.candidates:
            self.mention_list.add_widget(
                OneLineListItem(
                    text=exercise.name,
                    on_release=lambda _inst, name=exercise.name: self.select_mention(name),
                )
            )

    def select_mention(self, exercise_name: str):
        if not self.session:
            return
        text = self.session.select_mention(exercise_name)
        self._show_mentions(None)
        if self.notes_field:
            self.notes_field.text = text
            self.notes_field.focus = True

    # ------------------------------------------------------------------
    # Leaving the workout
    # ------------------------------------------------------------------
    def finish_workout(self):
        if self.session and not self.session.finish():
            logging.debug("Finish button pressed without completed sets")

    def request_exit(self):
        if self.session and self.session.needs_exit_confirmation:
            self._exit_dialog = MDDialog(
                title="Exit workout?",
                text="Your progress will be lost.",
                buttons=[
                    MDFlatButton(text="Cancel", on_release=lambda *_: self._exit_dialog.dismiss()),
                    MDFlatButton(text="Exit", on_release=self._perform_exit),
                ],
            )
            self._exit_dialog.open()
        else:
            self._perform_exit()

    def _perform_exit(self, *args):
        if getattr(self, "_exit_dialog", None):
            self._exit_dialog.dismiss()
            self._exit_dialog = None
        app = MDApp.get_running_app()
        if app:
            app.discard_workout()
