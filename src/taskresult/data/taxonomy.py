"""Task Scheduler status codes (SCHED_S_* / SCHED_E_*) from winerror.h.

Keys are the unsigned 32-bit HRESULT values. Success codes are small positive
int32 values; error codes carry the severity bit and exceed the int32 range.

New codes are appended at the end. Existing keys are never renumbered.
"""

from __future__ import annotations

from types import MappingProxyType

from taskresult.contracts.results import TaxonomyEntry

TAXONOMY_VERSION = "2024.1"

_ENTRIES: tuple[tuple[int, str, str, bool], ...] = (
    (0x00041300, "SCHED_S_TASK_READY", "The task is ready to run at its next scheduled time", True),
    (0x00041301, "SCHED_S_TASK_RUNNING", "The task is currently running", True),
    (0x00041302, "SCHED_S_TASK_DISABLED", "The task will not run at the scheduled times because it has been disabled", True),
    (0x00041303, "SCHED_S_TASK_HAS_NOT_RUN", "The task has not yet run", True),
    (0x00041304, "SCHED_S_TASK_NO_MORE_RUNS", "There are no more runs scheduled for this task", True),
    (0x00041305, "SCHED_S_TASK_NOT_SCHEDULED", "One or more of the properties that are needed to run this task on a schedule have not been set", True),
    (0x00041306, "SCHED_S_TASK_TERMINATED", "The last run of the task was terminated by the user", True),
    (0x00041307, "SCHED_S_TASK_NO_VALID_TRIGGERS", "Either the task has no triggers or the existing triggers are disabled or not set", True),
    (0x00041308, "SCHED_S_EVENT_TRIGGER", "Event triggers do not have set run times", True),
    (0x80041309, "SCHED_E_TRIGGER_NOT_FOUND", "A task's trigger is not found", False),
    (0x8004130A, "SCHED_E_TASK_NOT_READY", "One or more of the properties required to run this task have not been set", False),
    (0x8004130B, "SCHED_E_TASK_NOT_RUNNING", "There is no running instance of the task", False),
    (0x8004130C, "SCHED_E_SERVICE_NOT_INSTALLED", "The Task Scheduler service is not installed on this computer", False),
    (0x8004130D, "SCHED_E_CANNOT_OPEN_TASK", "The task object could not be opened", False),
    (0x8004130E, "SCHED_E_INVALID_TASK", "The object is either an invalid task object or is not a task object", False),
    (0x8004130F, "SCHED_E_ACCOUNT_INFORMATION_NOT_SET", "No account information could be found in the Task Scheduler security database for the task indicated", False),
    (0x80041310, "SCHED_E_ACCOUNT_NAME_NOT_FOUND", "Unable to establish existence of the account specified", False),
    (0x80041311, "SCHED_E_ACCOUNT_DBASE_CORRUPT", "Corruption was detected in the Task Scheduler security database; the database has been reset", False),
    (0x80041312, "SCHED_E_NO_SECURITY_SERVICES", "Task Scheduler security services are available only on Windows NT", False),
    (0x80041313, "SCHED_E_UNKNOWN_OBJECT_VERSION", "The task object version is either unsupported or invalid", False),
    (0x80041314, "SCHED_E_UNSUPPORTED_ACCOUNT_OPTION", "The task has been configured with an unsupported combination of account settings and run time options", False),
    (0x80041315, "SCHED_E_SERVICE_NOT_RUNNING", "The Task Scheduler Service is not running", False),
    (0x80041316, "SCHED_E_UNEXPECTEDNODE", "The task XML contains an unexpected node", False),
    (0x80041317, "SCHED_E_NAMESPACE", "The task XML contains an element or attribute from an unexpected namespace", False),
    (0x80041318, "SCHED_E_INVALIDVALUE", "The task XML contains a value which is incorrectly formatted or out of range", False),
    (0x80041319, "SCHED_E_MISSINGNODE", "The task XML is missing a required element or attribute", False),
    (0x8004131A, "SCHED_E_MALFORMEDXML", "The task XML is malformed", False),
    (0x0004131B, "SCHED_S_SOME_TRIGGERS_FAILED", "The task is registered, but not all specified triggers will start the task", True),
    (0x0004131C, "SCHED_S_BATCH_LOGON_PROBLEM", "The task is registered, but may fail to start. Batch logon privilege needs to be enabled for the task principal", True),
    (0x8004131D, "SCHED_E_TOO_MANY_NODES", "The task XML contains too many nodes of the same type", False),
    (0x8004131E, "SCHED_E_PAST_END_BOUNDARY", "The task cannot be started after the trigger end boundary", False),
    (0x8004131F, "SCHED_E_ALREADY_RUNNING", "An instance of this task is already running", False),
    (0x80041320, "SCHED_E_USER_NOT_LOGGED_ON", "The task will not run because the user is not logged on", False),
    (0x80041321, "SCHED_E_INVALID_TASK_HASH", "The task image is corrupt or has been tampered with", False),
    (0x80041322, "SCHED_E_SERVICE_NOT_AVAILABLE", "The Task Scheduler service is not available", False),
    (0x80041323, "SCHED_E_SERVICE_TOO_BUSY", "The Task Scheduler service is too busy to handle your request. Please try again later", False),
    (0x80041324, "SCHED_E_TASK_ATTEMPTED", "The Task Scheduler service attempted to run the task, but the task did not run due to one of the constraints in the task definition", False),
    (0x00041325, "SCHED_S_TASK_QUEUED", "The Task Scheduler service has asked the task to run", True),
    (0x80041326, "SCHED_E_TASK_DISABLED", "The task is disabled", False),
    (0x80041327, "SCHED_E_TASK_NOT_V1_COMPAT", "The task has properties that are not compatible with earlier versions of Windows", False),
    (0x80041328, "SCHED_E_START_ON_DEMAND", "The task settings do not allow the task to start on demand", False),
    (0x80041329, "SCHED_E_TASK_NOT_UBPM_COMPAT", "The combination of properties that task is using is not compatible with the scheduling engine", False),
    (0x80041330, "SCHED_E_DEPRECATED_FEATURE_USED", "The task definition uses a deprecated feature", False),
)

TAXONOMY: MappingProxyType[int, TaxonomyEntry] = MappingProxyType({
    code: TaxonomyEntry(canonical_name=name, message=message, is_success=ok)
    for code, name, message, ok in _ENTRIES
})
