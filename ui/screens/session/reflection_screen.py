from kivymd.app import MDApp
from kivymd.uix.screen import MDScreen
from kivymd.uix.list import OneLineListItem, TwoLineListItem
from kivy.properties import ObjectProperty, StringProperty


class ReflectionScreen(MDScreen):
    """Screen shown after a workout has been handed off."""

    summary_list = ObjectProperty(None)
    headline = StringProperty("")

    def on_pre_enter(self, *args):
        self.populate()
        return super().on_pre_enter(*args)

    def populate(self):
        if not self.summary_list:
            return
        self.summary_list.clear_widgets()
        app = MDApp.get_running_app()
        record = app.last_completed if app else None
        if not record:
            self.headline = ""
            return
        self.headline = record["title"] or "Workout complete"
        names = {ex.id: ex.name for ex in record["exercises"]}
        notes = record.get("exercise_notes", {})
        for exercise_id, sets in record["progress"].items():
            text = f"{names.get(exercise_id, exercise_id)}: {sum(sets)}/{len(sets)} sets"
            if exercise_id in notes:
                self.summary_list.add_widget(
                    TwoLineListItem(text=text, secondary_text=notes[exercise_id])
                )
            else:
                self.summary_list.add_widget(OneLineListItem(text=text))
