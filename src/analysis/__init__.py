"""
Analysis package: Gamma maximum-likelihood estimation and the simulation
study built around it.

Contains:
- mle: GammaMLE estimator and batch MLE analysis
- utils: Batch processing and common setup
- summarize_results: Bias, variance and interval coverage
- vignette: Worked single-sample example
"""
