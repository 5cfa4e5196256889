"""
Example: Logistic regression trained by gradient ascent

Fits a logistic regression model by maximizing the log-likelihood of a
synthetic dataset. The objective and its gradient come from torch autograd;
gradopt only consumes (value, gradient) pairs and updates the weight tensor
in place.
"""

import torch
import torch.nn.functional as F

from gradopt.optim import OptimConfig, create_optimizer
from gradopt.optimize import WeightsAveraging


def make_data(n_samples: int = 200, seed: int = 0):
    """Sample features and labels from a known logistic model."""
    generator = torch.Generator().manual_seed(seed)
    true_w = torch.tensor([1.5, -2.0, 0.5], dtype=torch.float64)
    x = torch.randn(n_samples, true_w.numel(), generator=generator, dtype=torch.float64)
    p = torch.sigmoid(x @ true_w)
    u = torch.rand(n_samples, generator=generator, dtype=torch.float64)
    y = (u < p).to(torch.float64)
    return x, y, true_w


def log_likelihood(w: torch.Tensor, x: torch.Tensor, y: torch.Tensor):
    """Return the log-likelihood at ``w`` and its gradient."""
    w = w.detach().clone().requires_grad_(True)
    ll = -F.binary_cross_entropy_with_logits(x @ w, y, reduction="sum")
    ll.backward()
    return float(ll.item()), w.grad.detach()


def train(config: OptimConfig, x: torch.Tensor, y: torch.Tensor, max_steps: int = 500):
    opt = create_optimizer(config)
    w = torch.zeros(x.shape[1], dtype=torch.float64)
    steps = 0
    while not opt.is_converged and steps < max_steps:
        value, grad = log_likelihood(w, x, y)
        opt.step(w, grad, value)
        steps += 1
    if isinstance(opt, WeightsAveraging):
        w = opt.average_weights()
    value, _ = log_likelihood(w, x, y)
    return w, value, steps


def main():
    x, y, true_w = make_data()
    print("=" * 60)
    print("Logistic regression by gradient ascent")
    print("=" * 60)
    print(f"True weights: {true_w.tolist()}")
    print()

    configs = [
        OptimConfig(name="conjugate_gradient"),
        OptimConfig(name="line_search"),
        OptimConfig(name="stepwise", rate=1e-3, averaged=True),
    ]
    for config in configs:
        label = config.name + (" (averaged)" if config.averaged else "")
        w, value, steps = train(config, x, y)
        print(f"{label}:")
        print(f"  steps: {steps}")
        print(f"  log-likelihood: {value:.4f}")
        print(f"  weights: {[round(v, 3) for v in w.tolist()]}")
        print()
    print("Done.")


if __name__ == "__main__":
    main()
