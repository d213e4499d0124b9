"""GUI package - ipywidgets adapter and views.

This package connects the engine to Jupyter widget forms:
1. widget_nodes: WidgetForm registry and capability wrappers for widget trees
2. message_view: HTML rendering of the message ledger
3. form_panel: Validate / Reset panel around a widget form
4. app: demo registration form with a live ledger table

Entry point:
    from form_validator.gui.form_panel import build_form_panel
    panel = build_form_panel(form)
"""
