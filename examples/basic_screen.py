#!/usr/bin/env python3
"""
Basic Screen Example
====================

Renders a small todo list into the in-process tree, adds an item through
the locators and checks the result with the screen matchers.

Usage:
    python examples/basic_screen.py
"""

from domscreen import DomScreenSession
from domscreen.trees import SoupLifecycle


def todo_app(container):
    """A component: markup plus a listener that appends new items."""
    container.append_html(
        '<input class="new-todo" placeholder="What needs to be done?">'
        '<ul class="todo-list"><li>Walk the dog</li></ul>'
    )
    new_todo = container.query_selector_all(".new-todo")[0]
    todo_list = container.query_selector_all(".todo-list")[0]

    def on_key(ev):
        if ev.key == "Enter" and new_todo.value:
            todo_list.append_html(f"<li>{new_todo.value}</li>")
            new_todo.value = ""

    new_todo.add_event_listener("keydown", on_key)


def main():
    print("=" * 60)
    print("DOM Screen - Basic Example")
    print("=" * 60)

    cleanups = []
    session = DomScreenSession.init_test(SoupLifecycle(), after_each=cleanups.append)
    expect = session.expect

    screen = session.render(todo_app)
    screen.locate(".new-todo").fill("Buy milk")
    screen.locate(".new-todo").press("Enter")

    items = screen.locate(".todo-list").locate("li")
    print(f"Locator: {items.format_description()}")
    for item in items.all_elements():
        print(f"  - {''.join(item.text_nodes())}")

    expect(items.filter_text("Buy milk")).to_be_in_document()
    expect(screen.locate(".new-todo")).not_.to_contain_text("Buy milk")
    print("All assertions passed.")

    for cleanup in cleanups:
        cleanup()


if __name__ == "__main__":
    main()
