class ServiceError(Exception):
    """Base exception for task service errors"""
    pass

class TaskNotFoundError(ServiceError):
    """Raised when no task exists for the requested id"""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")

class PersistenceError(ServiceError):
    """Raised when the task store fails; the driver error is kept as __cause__"""
    pass
