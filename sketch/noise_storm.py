from driftline.storm import StormParams
from driftline.storm.render import export_storm

# A4 縦に近い比率
CANVAS_WIDTH = 600
CANVAS_HEIGHT = 800

PARAMS = StormParams(seed=42, layers=120, noise_freq=3.5, tension=1.2)


if __name__ == "__main__":
    path = export_storm(
        PARAMS,
        fmt="svg",
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        font="",
    )
    print(path)
