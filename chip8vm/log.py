#make it true if you want the logs
logs_on = False


def set_logs(on):
    global logs_on
    logs_on = bool(on)


def toggle_logs():
    set_logs(not logs_on)
    print("logsOn:", logs_on)
    return logs_on


def log(*args):
    if logs_on:
        print(*args)
