import time


class ScheduledTask:
    def __init__(self, dueAt, callback, name=""):
        self.dueAt = dueAt
        self.callback = callback
        self.name = name
        self.cancelled = False
        self.fired = False
        self.handle = None

    @property
    def pending(self):
        return not (self.cancelled or self.fired)

    def run(self):
        if not self.pending:
            return False
        self.fired = True
        self.callback()
        return True


class Scheduler:
    """
    One-shot delayed callbacks on the game thread.
    schedule() returns a task; cancel() on a fired or cancelled task is a no-op.
    """

    def schedule(self, delay: float, callback, name="") -> ScheduledTask:
        raise NotImplementedError

    def cancel(self, task: ScheduledTask):
        if task is not None:
            task.cancelled = True

    def runDue(self) -> int:
        """Fires tasks whose time has come; event-loop schedulers fire on their own and return 0."""
        return 0


class ManualScheduler(Scheduler):
    """Runs due tasks whenever the host calls runDue(), typically from its tick loop."""

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.tasks = []

    def schedule(self, delay, callback, name=""):
        task = ScheduledTask(self.clock() + max(0.0, float(delay)), callback, name)
        self.tasks.append(task)
        return task

    def cancel(self, task):
        super().cancel(task)
        self.tasks = [t for t in self.tasks if t.pending]

    def pendingCount(self):
        return sum(1 for t in self.tasks if t.pending)

    def runDue(self) -> int:
        now = self.clock()
        due = sorted((t for t in self.tasks if t.pending and t.dueAt <= now), key=lambda t: t.dueAt)
        self.tasks = [t for t in self.tasks if t.pending and t not in due]
        ran = 0
        for task in due:
            if task.run():
                ran += 1
        return ran

    def runAll(self) -> int:
        """Fires every pending task regardless of its due time (used by the text front end)."""
        ran = 0
        while True:
            pending = sorted((t for t in self.tasks if t.pending), key=lambda t: t.dueAt)
            self.tasks = []
            if not pending:
                return ran
            for task in pending:
                if task.run():
                    ran += 1


class TkScheduler(Scheduler):
    def __init__(self, root):
        self.root = root

    def schedule(self, delay, callback, name=""):
        task = ScheduledTask(None, callback, name)
        task.handle = self.root.after(max(0, int(delay * 1000)), task.run)
        return task

    def cancel(self, task):
        if task is None:
            return
        if task.pending and task.handle is not None:
            self.root.after_cancel(task.handle)
        super().cancel(task)
