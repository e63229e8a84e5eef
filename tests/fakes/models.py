class WidgetModel:
    def __init__(self, name="widget"):
        self.name = name

    def to_dict(self):
        return {"name": self.name}
