from storage.task_store import TaskStore

# Session task list shared by all routers; tasks live only as long as the process
task_store = TaskStore()
