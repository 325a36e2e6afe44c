"""
Multilayer Perceptron Training and Evaluation
"""

import numpy as np
import torch
import torch.nn as nn
from torch.nn.utils import parameters_to_vector, vector_to_parameters

from ..core import VariableUse
from .evaluator import Evaluator


def _as_2d(a) -> np.ndarray:
    a = np.asarray(a, dtype=np.float32)
    return a.reshape(-1, 1) if a.ndim == 1 else a


class MLPTrainer(Evaluator):
    """Trains a one-hidden-layer perceptron on in-memory data.

    Masks select among the columns currently marked as inputs; an int
    structure is the hidden-layer size trained on all current inputs.
    """

    def __init__(self, x_train, y_train, x_val, y_val, hidden_units: int = 4, epochs: int = 200,
                 learning_rate: float = 0.01, weight_decay: float = 0.0, seed: int = 0, device: str = 'cpu'):
        self.x_train, self.y_train = _as_2d(x_train), _as_2d(y_train)
        self.x_val, self.y_val = _as_2d(x_val), _as_2d(y_val)
        if self.x_train.shape[1] != self.x_val.shape[1]:
            raise ValueError("Training and validation inputs have different widths")
        n_in, n_out = self.x_train.shape[1], self.y_train.shape[1]
        super().__init__([VariableUse.INPUT] * n_in + [VariableUse.TARGET] * n_out)
        self.hidden_units = hidden_units
        self.epochs = epochs
        self.learning_rate = learning_rate
        self.weight_decay = weight_decay
        self.seed = seed
        self.device = device
        self.weight_dict = {}
        self.network = None
        self.network_columns = None

    @property
    def outputs_number(self) -> int:
        return self.y_train.shape[1]

    def _resolve(self, structure):
        """Return (input columns, hidden units, weight-dict key) for a structure"""
        inputs = self.input_indices
        if isinstance(structure, (int, np.integer)):
            hidden = int(structure)
            columns = inputs
        else:
            mask = np.asarray(structure, dtype=bool)
            if mask.shape != (len(inputs),):
                raise ValueError(f"Mask of length {mask.shape} does not match {len(inputs)} inputs")
            columns = [c for c, keep in zip(inputs, mask) if keep]
            hidden = self.hidden_units
        if not columns:
            raise ValueError("Structure selects no inputs")
        if hidden <= 0:
            raise ValueError(f"Hidden layer size must be positive ({hidden})")
        return columns, hidden, (tuple(columns), hidden)

    def _build_model(self, n_in: int, hidden: int) -> nn.Module:
        return nn.Sequential(
            nn.Linear(n_in, hidden),
            nn.Tanh(),
            nn.Linear(hidden, self.outputs_number),
        ).to(self.device)

    def _tensor(self, a: np.ndarray, columns=None) -> torch.Tensor:
        if columns is not None:
            a = a[:, columns]
        return torch.from_numpy(np.ascontiguousarray(a)).to(self.device)

    def evaluate(self, structure):
        columns, hidden, key = self._resolve(structure)
        torch.manual_seed(self.seed)
        model = self._build_model(len(columns), hidden)
        criterion = nn.MSELoss()
        optimizer = torch.optim.Adam(model.parameters(), lr=self.learning_rate, weight_decay=self.weight_decay)

        x_train, y_train = self._tensor(self.x_train, columns), self._tensor(self.y_train)
        x_val, y_val = self._tensor(self.x_val, columns), self._tensor(self.y_val)

        model.train()
        for _ in range(self.epochs):
            optimizer.zero_grad()
            loss = criterion(model(x_train), y_train)
            loss.backward()
            optimizer.step()

        model.eval()
        with torch.no_grad():
            training = criterion(model(x_train), y_train).item()
            generalization = criterion(model(x_val), y_val).item()
        self.weight_dict[key] = parameters_to_vector(model.parameters()).detach().cpu().numpy().astype(float)
        return training, generalization

    def get_parameters(self, structure):
        _, _, key = self._resolve(structure)
        if key not in self.weight_dict:
            self.evaluate(structure)
        return self.weight_dict[key].copy()

    def install(self, structure, parameters):
        columns, hidden, _ = self._resolve(structure)
        model = self._build_model(len(columns), hidden)
        vector_to_parameters(torch.as_tensor(np.asarray(parameters), dtype=torch.float32, device=self.device),
                             model.parameters())
        self.network, self.network_columns = model, columns

    def predict(self, x) -> np.ndarray:
        if self.network is None:
            raise RuntimeError("No network installed")
        self.network.eval()
        with torch.no_grad():
            return self.network(self._tensor(_as_2d(x), self.network_columns)).cpu().numpy()

    def calculate_input_importance(self):
        """Absolute correlation of every current input with the targets"""
        x = self.x_train[:, self.input_indices].astype(float)
        y = self.y_train.astype(float)
        xc, yc = x - x.mean(axis=0), y - y.mean(axis=0)
        denom = np.outer(np.sqrt((xc ** 2).sum(axis=0)), np.sqrt((yc ** 2).sum(axis=0)))
        with np.errstate(divide='ignore', invalid='ignore'):
            corr = np.where(denom > 0, xc.T @ yc / denom, 0.0)
        return np.abs(corr).mean(axis=1)
