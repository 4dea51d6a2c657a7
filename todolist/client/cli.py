"""Interactive terminal front end for the to-do list.

Tasks are addressed by their row number in the rendered list.
"""
import argparse
import shlex

from todolist.client.api import TodoApiClient
from todolist.client.view import TodoListView
from todolist.config import get_settings
from todolist.logging_setup import setup_logging

HELP = """Commands:
  add <title> [description]     add a task to the selected category
  category <id>                 select the category for new tasks
  edit <n>                      edit task n
    title <text> | description <text> | move <category id>
    save | cancel
  toggle <n>                    mark task n done / not done
  delete <n>                    delete task n (asks for confirmation)
    confirm | dismiss
  refresh                       reload categories and tasks
  help                          show this text
  quit                          exit"""


def render(view: TodoListView) -> str:
    lines = ["To-Do List", ""]
    if view.error:
        lines += [f"! {view.error}", ""]
    selected = view.category_name(view.new_task.category_id)
    lines.append("Categories: " + ", ".join(f"{c.id}={c.name} (priority {c.priority})" for c in view.categories))
    lines.append(f"New tasks go to: {selected}")
    lines.append("")
    if not view.tasks:
        lines.append("  (no tasks)")
    for n, row in enumerate(view.rows(), start=1):
        task = view.editing if row.editing else row.task
        mark = "x" if task.completed else " "
        suffix = "  <editing>" if row.editing else ""
        lines.append(f"{n:>3}. [{mark}] {task.title}  [{view.category_name(task.category_id)}]{suffix}")
        if task.description:
            lines.append(f"       {task.description}")
    pending = next((t for t in view.tasks if t.id == view.pending_delete), None)
    if pending is not None:
        lines += ["", f"Delete '{pending.title}'? (confirm / dismiss)"]
    return "\n".join(lines)


def _task_id(view: TodoListView, arg: str) -> str | None:
    try:
        index = int(arg) - 1
    except ValueError:
        return None
    if 0 <= index < len(view.tasks):
        return view.tasks[index].id
    return None


def handle_command(view: TodoListView, line: str) -> bool:
    """Run one command against the view. Returns False when the user quits."""
    try:
        parts = shlex.split(line)
    except ValueError:
        print("Unbalanced quotes")
        return True
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    view.error = ""

    if cmd in ("quit", "exit", "q"):
        return False
    if cmd == "help":
        print(HELP)
    elif cmd == "refresh":
        view.load()
    elif cmd == "add" and args:
        view.new_task.title = args[0]
        view.new_task.description = " ".join(args[1:])
        view.add_task()
    elif cmd == "category" and args and args[0].isdigit():
        view.new_task.category_id = int(args[0])
    elif cmd == "edit" and args and _task_id(view, args[0]):
        view.start_edit(_task_id(view, args[0]))
    elif cmd == "title" and args and view.editing:
        view.change_edit(title=" ".join(args))
    elif cmd == "description" and view.editing:
        view.change_edit(description=" ".join(args))
    elif cmd == "move" and args and args[0].isdigit() and view.editing:
        view.change_edit(category_id=int(args[0]))
    elif cmd == "save":
        view.save_edit()
    elif cmd == "cancel":
        view.cancel_edit()
    elif cmd == "toggle" and args and _task_id(view, args[0]):
        view.toggle_complete(_task_id(view, args[0]))
    elif cmd == "delete" and args and _task_id(view, args[0]):
        view.request_delete(_task_id(view, args[0]))
    elif cmd == "confirm":
        view.confirm_delete()
    elif cmd == "dismiss":
        view.dismiss_delete()
    else:
        print(f"Unknown command: {line!r}. Type 'help'.")
    return True


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="todolist-client", description="Terminal to-do list client")
    parser.add_argument("--api-url", default=get_settings().api_url, help="base URL of the to-do list API")
    args = parser.parse_args(argv)

    setup_logging("WARNING")
    view = TodoListView(TodoApiClient(args.api_url))
    view.load()
    while True:
        print(render(view))
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not handle_command(view, line):
            break


if __name__ == "__main__":
    main()
