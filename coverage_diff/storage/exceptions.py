class ResultsetNotFoundError(FileNotFoundError):
    def __init__(self, filepath):
        super().__init__(f"{filepath} does not exist!")
        self.filepath = filepath

    def __str__(self) -> str:
        return self.args[0]
