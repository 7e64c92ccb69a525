from estimation.estimator import FootprintInputs, estimate

inputs = FootprintInputs(
    transportation=100,
    electricity=200,
    lpg=10,
    png=5,
    waste=10,
    diet="high",
)

print(estimate(inputs).to_dict())
