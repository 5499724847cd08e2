import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, mode, file_path, position, total,
                  editable_fields, dirty
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        mode = context.get('mode', 'normal')
        mode = 'INSERT' if mode == 'insert' else 'RECORD'
        fname = context.get('file_path') or ''
        if fname:
            fname = os.path.basename(fname)
        else:
            fname = '[no file]'
        counter = f"Paper: {context.get('position', 0)} / {context.get('total', 0)}"
        fields = context.get('editable_fields') or ()
        field_info = f"{len(fields)} field{'s' if len(fields) != 1 else ''}"
        dirty = " [+]" if context.get('dirty') else ""
        text = f" {mode} | {fname}{dirty} | {counter} | {field_info} | ? help"

    return text.ljust(width)[:width]
