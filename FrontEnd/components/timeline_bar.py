from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QGridLayout, QLabel, QProgressBar


class TimelineBar(QWidget):
    """24 rows, one per hour of today, filled by the minutes worked in that hour."""

    def __init__(self):
        super().__init__()
        self.setObjectName("Card")
        layout = QGridLayout()
        layout.setContentsMargins(24, 16, 24, 16)
        layout.setVerticalSpacing(2)
        title = QLabel("Today's Timeline (12 AM - 11:59 PM)")
        title.setObjectName("SectionTitle")
        layout.addWidget(title, 0, 0, 1, 3)
        self._bars = []
        self._minutes = []
        for hour in range(24):
            label = QLabel()
            label.setObjectName("Muted")
            label.setFixedWidth(56)
            label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            bar = QProgressBar()
            bar.setRange(0, 100)
            bar.setTextVisible(False)
            minutes = QLabel("")
            minutes.setObjectName("Muted")
            minutes.setFixedWidth(40)
            layout.addWidget(label, hour + 1, 0)
            layout.addWidget(bar, hour + 1, 1)
            layout.addWidget(minutes, hour + 1, 2)
            self._bars.append((label, bar))
            self._minutes.append(minutes)
        self.setLayout(layout)

    def set_slots(self, slots):
        for slot, (label, bar), minutes in zip(slots, self._bars, self._minutes):
            label.setText(slot.label)
            bar.setValue(int(round(slot.worked_percentage)))
            worked = int(round(slot.worked_minutes))
            minutes.setText(f"{worked}m" if worked > 0 else "")
