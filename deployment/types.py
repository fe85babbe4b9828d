import click


class MinFloat(click.ParamType):
    """A number of seconds (or any other quantity) with a lower bound."""

    name = "minfloat"

    def __init__(self, min_value: float):
        self.min_value = min_value

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            try:
                number = float(value)
            except ValueError:
                self.fail(f"{value} is not a valid number", param, ctx)
        if number < self.min_value:
            self.fail(
                f"{value} is less than the minimum allowed value of {self.min_value}", param, ctx
            )
        return number
