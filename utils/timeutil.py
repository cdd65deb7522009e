from datetime import datetime

def now_iso() -> str:
    return datetime.now().replace(microsecond=0).isoformat()

def run_stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")
