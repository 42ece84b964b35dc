"""Win32 system error messages for the portable table lookup.

A subset of the Windows system message table covering the codes task actions
most commonly exit with. Text matches ``FormatMessage`` output with the
trailing line break removed.
"""

from __future__ import annotations

from types import MappingProxyType

WIN32_MESSAGES: MappingProxyType[int, str] = MappingProxyType({
    0: "The operation completed successfully.",
    1: "Incorrect function.",
    2: "The system cannot find the file specified.",
    3: "The system cannot find the path specified.",
    4: "The system cannot open the file.",
    5: "Access is denied.",
    6: "The handle is invalid.",
    8: "Not enough memory resources are available to process this command.",
    13: "The data is invalid.",
    14: "Not enough memory resources are available to complete this operation.",
    15: "The system cannot find the drive specified.",
    32: "The process cannot access the file because it is being used by another process.",
    53: "The network path was not found.",
    67: "The network name cannot be found.",
    87: "The parameter is incorrect.",
    112: "There is not enough space on the disk.",
    123: "The filename, directory name, or volume label syntax is incorrect.",
    183: "Cannot create a file when that file already exists.",
    267: "The directory name is invalid.",
    1053: "The service did not respond to the start or control request in a timely fashion.",
    1056: "An instance of the service is already running.",
    1058: "The service cannot be started, either because it is disabled or because it has no enabled devices associated with it.",
    1060: "The specified service does not exist as an installed service.",
    1223: "The operation was canceled by the user.",
    1326: "The user name or password is incorrect.",
    1385: "Logon failure: the user has not been granted the requested logon type at this computer.",
    1460: "This operation returned because the timeout period expired.",
    1722: "The RPC server is unavailable.",
    4320: "The operator or administrator has refused the request.",
})
