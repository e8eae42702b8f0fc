from driftline import Export, G, L
from driftline.stripes import FillVariantMode, PalettePreset, StripeParams, generate_stripes
from driftline.stripes.palettes import palette_for
from driftline.stripes.render import stripe_layers

CANVAS_WIDTH = 600
CANVAS_HEIGHT = 800

PARAMS = StripeParams(
    seed=2024,
    stripe_count=36,
    palette=PalettePreset.TOKYO_DRIFT,
    fill_mode=FillVariantMode.GROUPED,
    split_bias=0.9,
)


def draw(t: float):
    stripes = generate_stripes(PARAMS, CANVAS_WIDTH, CANVAS_HEIGHT)
    frame = G.rect(origin=(0.0, 0.0), size=(CANVAS_WIDTH, CANVAS_HEIGHT))
    return stripe_layers(stripes, PARAMS, CANVAS_WIDTH, CANVAS_HEIGHT) + L(
        frame, color=(1.0, 1.0, 1.0), thickness=4.0
    )


if __name__ == "__main__":
    Export(
        draw,
        0.0,
        "svg",
        "data/output/svg/split_stripes_sketch.svg",
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        background_color=palette_for(PARAMS.palette).background,
    )
