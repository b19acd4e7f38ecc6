class DiaryPlannerError(Exception):
    """Base class for errors raised outside the extraction engine."""


class NoTextExtractedError(DiaryPlannerError):
    pass


class OCRError(DiaryPlannerError):
    pass


class UnsupportedFileTypeError(DiaryPlannerError):
    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type}")


class TaskNotFoundError(DiaryPlannerError, KeyError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")

    def __str__(self) -> str:
        return self.args[0]
