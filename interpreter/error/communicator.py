from typing import Optional, Sequence, Type

from interpreter.util import MAX_REPORTED_ERRORS, Colors, Span


# Class used to create messages, which can be communicated to the programmer
class Communicator:

    # Creates an appropriate message string from the given arguments
    @staticmethod
    def create_message(
        program: str,
        span: Span,
        class_name="InterpreterError",
        before: str = "",
        after: str = "",
        n_before: int = 1,
        n_after: int = 1,
        color: Optional[str] = Colors.RED,
    ) -> str:
        start, end = (color, Colors.ENDC) if color else ("", "")
        lines = program.splitlines()
        error_lines = lines[
            max(0, span.start_ln - n_before - 1) : span.end_ln + n_after
        ]
        final_error_lines = []
        start_line_no = max(1, span.start_ln - n_before)
        end_line_no = start_line_no + len(error_lines) - 1
        for i, line in enumerate(error_lines, start=start_line_no):
            # Determine the number of spaces between e.g. '8.' and the code.
            # See the * in the following example:
            #    *8. let a = 12;
            # -> *9. let b = ;
            #    10. a + b
            padding = " " * (len(str(end_line_no)) - len(str(i)))
            final_line = ""
            # If this line contains denotated spans:
            if span.start_ln <= i <= span.end_ln:
                # First line
                if i == span.start_ln:
                    final_line += f"-> {padding}{i}. {line[:span.start_col]}"

                    # If we have more than 1 line, color the remaining line
                    if span.multiline:
                        final_line += f"{start}{line[span.start_col:]}{end}"
                    # If there is one line, color up until the correct col
                    else:
                        final_line += f"{start}{line[span.start_col:span.end_col]}{end}"
                        final_line += line[span.end_col :]

                # Color lines (if any) that are in between the first and last line
                elif span.start_ln < i < span.end_ln:
                    final_line += f"-> {padding}{i}. {start}{line}{end}"
                # The last line, of a multiline
                else:
                    final_line += f"-> {padding}{i}. {start}{line[:span.end_col]}{end}"
                    final_line += line[span.end_col :]

            else:
                final_line += f"   {padding}{i}. {line}"
            final_error_lines.append(final_line)

        message = class_name + ": " + before + "\n" + "\n".join(final_error_lines)
        if after:
            message += "\n" + after
        return message

    # Communicates all errors to the programmer by raising `stage_of_exception`
    @staticmethod
    def communicate(
        errors: Sequence, stage_of_exception: Type[Exception], color: bool = True
    ) -> None:
        if not errors:
            return

        shown = errors[:MAX_REPORTED_ERRORS]
        message = "".join("\n\n" + error.detailed(color=color) for error in shown)
        if len(errors) > MAX_REPORTED_ERRORS:
            n_omitted = len(errors) - MAX_REPORTED_ERRORS
            message += f"\n\nShowing {MAX_REPORTED_ERRORS} errors, omitting {n_omitted} error{'s' if n_omitted > 1 else ''}..."
        raise stage_of_exception(message)
