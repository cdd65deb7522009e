import os
import stat

from domain.rules import is_hidden_name


def get_attrs(st: os.stat_result) -> int:
    # st_file_attributes only exists on Windows
    return int(getattr(st, "st_file_attributes", 0))

def is_hidden(path: str, st: os.stat_result) -> bool:
    if is_hidden_name(os.path.basename(path)):
        return True
    return bool(get_attrs(st) & stat.FILE_ATTRIBUTE_HIDDEN)

def is_link(st: os.stat_result) -> bool:
    return stat.S_ISLNK(st.st_mode) or bool(get_attrs(st) & stat.FILE_ATTRIBUTE_REPARSE_POINT)

def is_regular(st: os.stat_result) -> bool:
    return stat.S_ISREG(st.st_mode)
