# Design tokens for Time Tracker UI

COLORS = {
    'background': '#0D1B2A',
    'surface': '#1B263B',
    'surface_sunken': '#0D1B2A',
    'primary': '#415A77',
    'primary_hover': '#4F6B8C',
    'accent': '#778DA9',
    'text': '#E0E1DD',
    'text_muted': '#778DA9',
    'border': '#415A77',
    'danger': '#9B4A4A',
    'sidebar_bg': '#1B263B',
    'sidebar_active_bg': '#415A77',
    'timeline_fill': '#778DA9',
    'footer_bg': '#1B263B',
    'footer_text': '#E0E1DD',
    'chart_bar': '#778DA9',
    'chart_edge': '#415A77',
}

FONTS = {
    'family': 'Inter, Manrope, Arial, sans-serif',
    'timer_size': 88,
    'timer_weight': 'bold',
    'button_size': 18,
    'button_weight': 600,
    'sidebar_size': 16,
    'text': 16,
    'text_small': 12,
    'text_strong': 22,
}


def stylesheet():
    """Application-wide QSS built from the tokens."""
    c, f = COLORS, FONTS
    return f"""
QWidget {{ background: {c['background']}; color: {c['text']}; font-family: {f['family']}; font-size: {f['text']}px; }}
QListWidget#Sidebar {{ background: {c['sidebar_bg']}; border: none; }}
QListWidget#Sidebar::item {{ padding: 12px 0 12px 24px; }}
QListWidget#Sidebar::item:selected {{ background: {c['sidebar_active_bg']}; }}
QWidget#Card {{ background: {c['surface']}; border-radius: 12px; }}
QLabel#TimerLabel {{ font-size: {f['timer_size']}px; font-weight: {f['timer_weight']}; background: transparent; }}
QLabel#SectionTitle {{ font-size: {f['text_strong']}px; font-weight: bold; background: transparent; }}
QLabel#Muted {{ color: {c['text_muted']}; background: transparent; }}
QPushButton {{ background: {c['primary']}; border: none; border-radius: 8px; padding: 10px 20px; font-size: {f['button_size']}px; font-weight: {f['button_weight']}; }}
QPushButton:hover {{ background: {c['primary_hover']}; }}
QPushButton:checked {{ background: {c['accent']}; color: {c['background']}; }}
QPushButton#DangerBtn {{ background: {c['danger']}; }}
QProgressBar {{ background: {c['surface_sunken']}; border: none; border-radius: 4px; max-height: 18px; }}
QProgressBar::chunk {{ background: {c['timeline_fill']}; border-radius: 4px; }}
QLineEdit, QComboBox {{ background: {c['surface_sunken']}; border: 1px solid {c['border']}; border-radius: 6px; padding: 6px; }}
QTableWidget {{ background: {c['surface_sunken']}; gridline-color: {c['border']}; }}
"""
