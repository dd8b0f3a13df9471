from PySide6.QtWidgets import (
	QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QListWidget,
	QStackedWidget, QListWidgetItem, QTableWidget, QTableWidgetItem, QSizePolicy, QComboBox,
	QLineEdit, QScrollArea, QButtonGroup
)
from PySide6.QtCore import Qt, QThreadPool
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
import datetime
from BackEnd.core.clock import fmt_hms, local_today_str, now_ms
from BackEnd.models.session import Mode, TimeRange
from BackEnd.services import analytics
from FrontEnd.components.footer_today import FooterToday
from FrontEnd.components.timeline_bar import TimelineBar
from FrontEnd.styles.design_tokens import COLORS, stylesheet


class MainWindow(QMainWindow):
	def __init__(self, controller, sessions, sync=None):
		super().__init__()
		self.controller = controller
		self.sessions = sessions
		self.sync = sync
		self.setWindowTitle("Time Tracker")
		self.resize(1000, 720)
		self.setStyleSheet(stylesheet())

		# --- Sidebar ---
		self.sidebar = QListWidget()
		self.sidebar.setObjectName("Sidebar")
		self.sidebar.setFixedWidth(200)
		self.sidebar.setSpacing(8)
		self.sidebar.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		self.sidebar.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		self.sidebar.addItem(QListWidgetItem("Tracker"))
		self.sidebar.addItem(QListWidgetItem("Analytics"))
		self.sidebar.setCurrentRow(0)

		self.stack = QStackedWidget()
		self.tracker_tab = self._build_tracker_tab()
		self.analytics_tab = self._build_analytics_tab()
		self.stack.addWidget(self.tracker_tab)
		self.stack.addWidget(self.analytics_tab)

		main_layout = QHBoxLayout()
		main_layout.setContentsMargins(0, 0, 0, 0)
		main_layout.setSpacing(0)
		main_layout.addWidget(self.sidebar)
		main_layout.addWidget(self.stack)
		container = QWidget()
		container.setLayout(main_layout)
		self.setCentralWidget(container)

		self.sidebar.currentRowChanged.connect(self.stack.setCurrentIndex)
		self.sidebar.currentRowChanged.connect(self._on_page_changed)

		self.controller.tick.connect(self._on_tick)
		self.controller.state_changed.connect(self._on_state)
		self.controller.mode_changed.connect(self._on_mode)
		self.controller.session_recorded.connect(lambda _s: self._refresh_today())
		if self.sync is not None:
			self.sync.synced.connect(self._on_synced)
			self.sync.sync_failed.connect(self._on_sync_failed)

		# reflect whatever state the controller resumed into
		self._on_mode(self.controller.mode.value)
		self._on_state('running' if self.controller.running else 'idle')
		self._on_tick(self.controller.display_seconds)

	def closeEvent(self, event):
		# A running interval stays persisted; the next launch resumes it.
		self.controller.shutdown()
		super().closeEvent(event)

	def _build_tracker_tab(self):
		w = QWidget()
		outer = QVBoxLayout()
		outer.setContentsMargins(32, 24, 32, 24)
		outer.setSpacing(16)

		# Mode selector
		mode_row = QHBoxLayout()
		mode_row.addStretch()
		self.stopwatch_btn = QPushButton("Stopwatch")
		self.timer_btn = QPushButton("Timer")
		self.mode_group = QButtonGroup(self)
		for btn in (self.stopwatch_btn, self.timer_btn):
			btn.setCheckable(True)
			self.mode_group.addButton(btn)
			mode_row.addWidget(btn)
		mode_row.addStretch()
		self.stopwatch_btn.clicked.connect(lambda: self.controller.switch_mode(Mode.STOPWATCH))
		self.timer_btn.clicked.connect(lambda: self.controller.switch_mode(Mode.TIMER))
		outer.addLayout(mode_row)

		# Display card
		timer_card = QWidget()
		timer_card.setObjectName("Card")
		timer_card_layout = QVBoxLayout()
		timer_card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
		timer_card.setLayout(timer_card_layout)

		self.timer_label = QLabel("00:00:00")
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		timer_card_layout.addWidget(self.timer_label)

		# Timer length editor, only while the timer is idle
		self.minutes_row = QWidget()
		minutes_layout = QHBoxLayout()
		minutes_layout.setContentsMargins(0, 0, 0, 0)
		minutes_layout.addStretch()
		self.minutes_edit = QLineEdit(str(self.controller.timer_duration // 60))
		self.minutes_edit.setFixedWidth(80)
		self.minutes_edit.setAlignment(Qt.AlignmentFlag.AlignCenter)
		minutes_label = QLabel("minutes")
		minutes_label.setObjectName("Muted")
		self.set_minutes_btn = QPushButton("Set")
		minutes_layout.addWidget(self.minutes_edit)
		minutes_layout.addWidget(minutes_label)
		minutes_layout.addWidget(self.set_minutes_btn)
		minutes_layout.addStretch()
		self.minutes_row.setLayout(minutes_layout)
		self.set_minutes_btn.clicked.connect(self._set_minutes)
		self.minutes_edit.returnPressed.connect(self._set_minutes)
		timer_card_layout.addWidget(self.minutes_row)

		# Buttons row
		btn_layout = QHBoxLayout()
		btn_layout.setSpacing(24)
		self.start_stop_btn = QPushButton("Start")
		self.start_stop_btn.setObjectName("StartBtn")
		self.reset_btn = QPushButton("Reset")
		self.reset_btn.setObjectName("DangerBtn")
		for btn in (self.start_stop_btn, self.reset_btn):
			btn.setMinimumHeight(52)
			btn_layout.addWidget(btn)
		self.start_stop_btn.clicked.connect(self._start_stop)
		self.reset_btn.clicked.connect(self.controller.reset)
		timer_card_layout.addSpacing(16)
		timer_card_layout.addLayout(btn_layout)
		outer.addWidget(timer_card)

		self.timeline = TimelineBar()
		outer.addWidget(self.timeline)

		# Today's summary
		summary = QWidget()
		summary.setObjectName("Card")
		summary_layout = QVBoxLayout()
		summary_layout.setContentsMargins(24, 16, 24, 16)
		title = QLabel("Today's Sessions")
		title.setObjectName("SectionTitle")
		summary_layout.addWidget(title)
		self.today_list = QListWidget()
		self.today_list.setMinimumHeight(120)
		summary_layout.addWidget(self.today_list)
		summary.setLayout(summary_layout)
		outer.addWidget(summary)

		self.footer_today = FooterToday("Today: 00:00:00")
		outer.addWidget(self.footer_today)
		w.setLayout(outer)

		scroll = QScrollArea()
		scroll.setWidgetResizable(True)
		scroll.setWidget(w)
		self._refresh_today()
		return scroll

	def _build_analytics_tab(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setAlignment(Qt.AlignmentFlag.AlignTop)
		layout.setContentsMargins(32, 32, 32, 32)

		# Range selector on the right, sync controls on the left
		top_row = QHBoxLayout()
		self.push_btn = QPushButton("Push")
		self.pull_btn = QPushButton("Pull")
		self.sync_status = QLabel("")
		self.sync_status.setObjectName("Muted")
		for widget in (self.push_btn, self.pull_btn, self.sync_status):
			top_row.addWidget(widget)
		self.push_btn.clicked.connect(self._push)
		self.pull_btn.clicked.connect(self._pull)
		if self.sync is None:
			self.push_btn.setEnabled(False)
			self.pull_btn.setEnabled(False)
		top_row.addStretch()
		top_row.addWidget(QLabel("Show time for:"))
		self.range_combo = QComboBox()
		self.range_combo.addItems([r.value.capitalize() for r in TimeRange])
		self.range_combo.setMinimumWidth(140)
		self.range_combo.currentIndexChanged.connect(lambda _i: self._refresh_analytics())
		top_row.addWidget(self.range_combo)
		layout.addLayout(top_row)

		self.stats_label = QLabel("")
		self.stats_label.setObjectName("Muted")
		layout.addWidget(self.stats_label)

		# Bar chart (matplotlib)
		self.figure = Figure(figsize=(5, 2.5))
		self.canvas = FigureCanvas(self.figure)
		layout.addWidget(self.canvas)

		# Daily breakdown
		self.day_table = QTableWidget()
		self.day_table.setColumnCount(3)
		self.day_table.setHorizontalHeaderLabels(["Date", "Hours", "Sessions"])
		self.day_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
		self.day_table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
		self.day_table.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		layout.addWidget(self.day_table)
		w.setLayout(layout)
		return w

	def _selected_range(self):
		return list(TimeRange)[self.range_combo.currentIndex()]

	def _on_page_changed(self, row):
		if row == 1:
			self._refresh_analytics()

	def _on_tick(self, seconds):
		self.timer_label.setText(fmt_hms(seconds))
		if self.controller.running:
			self._refresh_timeline()

	def _on_state(self, state):
		running = state == 'running'
		self.start_stop_btn.setText("Stop" if running else "Start")
		self.minutes_row.setVisible(self.controller.mode is Mode.TIMER and not running)
		self._refresh_today()

	def _on_mode(self, mode):
		self.stopwatch_btn.setChecked(mode == Mode.STOPWATCH.value)
		self.timer_btn.setChecked(mode == Mode.TIMER.value)
		self.minutes_row.setVisible(mode == Mode.TIMER.value and not self.controller.running)

	def _start_stop(self):
		if self.controller.running:
			self.controller.stop()
		else:
			self.controller.start()

	def _set_minutes(self):
		seconds = self.controller.set_timer_minutes(self.minutes_edit.text())
		self.minutes_edit.setText(str(seconds // 60))

	def _refresh_timeline(self):
		sessions = self.sessions.sessions
		self.timeline.set_slots(analytics.build_today_timeline(sessions, self.controller.live_session()))

	def _refresh_today(self):
		sessions = self.sessions.sessions
		self._refresh_timeline()
		self.footer_today.set_today(analytics.daily_total(sessions, local_today_str()))
		self.today_list.clear()
		todays = analytics.today_sessions(sessions)
		for sess in todays:
			start = datetime.datetime.fromtimestamp(sess.start_time / 1000).strftime("%H:%M:%S")
			end = datetime.datetime.fromtimestamp(sess.end_time / 1000).strftime("%H:%M:%S")
			self.today_list.addItem(f"{start} - {end}   {sess.mode.value}   {fmt_hms(sess.duration)}")
		if not todays:
			self.today_list.addItem("No sessions yet today")

	def _refresh_analytics(self):
		sessions = self.sessions.sessions
		days = analytics.group_by_day(analytics.filter_by_range(sessions, self._selected_range(), now_ms()))
		self._update_bar_chart(days)

		self.day_table.setRowCount(len(days))
		for row, day in enumerate(reversed(days)):
			label = datetime.date.fromisoformat(day.date).strftime("%a, %b %d")
			self.day_table.setItem(row, 0, QTableWidgetItem(label))
			self.day_table.setItem(row, 1, QTableWidgetItem(f"{day.hours:.1f}h"))
			count = len(day.sessions)
			self.day_table.setItem(row, 2, QTableWidgetItem(f"{count} session{'s' if count != 1 else ''}"))

		self.stats_label.setText(
			f"Streak: {analytics.daily_streak(sessions, local_today_str())} days   "
			f"Days tracked: {analytics.days_tracked(sessions)}   "
			f"Total: {analytics.total_hours(sessions):.1f}h"
		)

	def _update_bar_chart(self, days):
		points = analytics.chart_points(days)
		x = [label for label, _ in points]
		y = [hours for _, hours in points]

		self.figure.clear()
		self.figure.patch.set_facecolor(COLORS['surface'])
		ax = self.figure.add_subplot(111)
		ax.set_facecolor(COLORS['surface'])
		bars = ax.bar(x, y, color=COLORS['chart_bar'], edgecolor=COLORS['chart_edge'], linewidth=1.2)
		for bar, value in zip(bars, y):
			if value > 0:
				ax.text(bar.get_x() + bar.get_width()/2, bar.get_height() + 0.05,
				       f'{value:.1f}h', ha='center', va='bottom',
				       fontsize=9, fontweight='600', color=COLORS['text'])
		ax.set_ylabel("Hours", fontsize=12, color=COLORS['text'], labelpad=10)
		ax.set_ylim(bottom=0)
		ax.grid(True, axis='y', alpha=0.25, linestyle='--', linewidth=0.8, color=COLORS['border'])
		ax.set_axisbelow(True)
		ax.tick_params(axis='both', colors=COLORS['text_muted'], labelsize=10)
		for spine in ['top', 'right']:
			ax.spines[spine].set_visible(False)
		for spine in ['bottom', 'left']:
			ax.spines[spine].set_color(COLORS['border'])
		if len(x) > 15:
			ax.tick_params(axis='x', rotation=45)
		self.figure.tight_layout()
		self.canvas.draw()

	def _push(self):
		self.sync_status.setText("Syncing…")
		QThreadPool.globalInstance().start(self.sync.push)

	def _pull(self):
		self.sync_status.setText("Syncing…")
		QThreadPool.globalInstance().start(self.sync.pull)

	def _on_synced(self, direction, count):
		self.sync_status.setText(f"{direction.capitalize()}ed {count} sessions")
		if direction == 'pull':
			self._refresh_today()
			self._refresh_analytics()

	def _on_sync_failed(self, message):
		self.sync_status.setText(f"Sync failed: {message}")
